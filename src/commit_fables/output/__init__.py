"""Story export."""

from .report import export_json, export_markdown, write_export

__all__ = ["export_json", "export_markdown", "write_export"]
