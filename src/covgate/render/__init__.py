from covgate.render.markdown import full_report, modified_files_table, total_coverage_heading

__all__ = ["full_report", "modified_files_table", "total_coverage_heading"]
