"""CSV table and PDF report exports with share/download delivery."""

from firevitals.export.pipeline import (
    EmailDraft,
    ExportMethod,
    ExportPipeline,
    ExportResult,
    export_basename,
)
from firevitals.export.report import build_report, layout_report
from firevitals.export.share import (
    DirectoryDownloader,
    Downloader,
    ExportFile,
    HttpShareTarget,
    ShareTarget,
)
from firevitals.export.table import build_table

__all__ = [
    "DirectoryDownloader",
    "Downloader",
    "EmailDraft",
    "ExportFile",
    "ExportMethod",
    "ExportPipeline",
    "ExportResult",
    "HttpShareTarget",
    "ShareTarget",
    "build_report",
    "build_table",
    "export_basename",
    "layout_report",
]
