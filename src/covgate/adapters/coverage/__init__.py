from covgate.adapters.coverage.cobertura import CoberturaProvider
from covgate.adapters.coverage.discover import resolve_report_paths

__all__ = ["CoberturaProvider", "resolve_report_paths"]
