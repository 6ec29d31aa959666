"""Export orchestration and file delivery."""

from pyorders.export.delivery import DirectoryDeliverer, FileDeliverer, MemoryDeliverer
from pyorders.export.orchestrator import (
    ExportOrchestrator,
    ExportResult,
    ExportStatus,
    build_export_filename,
    build_export_request,
)

__all__ = [
    "DirectoryDeliverer",
    "ExportOrchestrator",
    "ExportResult",
    "ExportStatus",
    "FileDeliverer",
    "MemoryDeliverer",
    "build_export_filename",
    "build_export_request",
]
