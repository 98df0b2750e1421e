from covgate.adapters.vcs.git import GitChangeSet, parse_name_status
from covgate.adapters.vcs.static import StaticChangeSet

__all__ = ["GitChangeSet", "StaticChangeSet", "parse_name_status"]
