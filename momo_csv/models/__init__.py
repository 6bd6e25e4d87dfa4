"""Domain models for the MOMO -> ZOHO ERP CSV converter."""

from .conversion_result import ConversionResult
from .error_record import ErrorRecord
from .excel_file import ExcelFile, FileStatus
from .order_record import OrderRecord, RecordKind, ReturnRecord, ShipmentRecord
from .processing_result import FileStat, ProcessingResult

__all__ = [
    # Conversion models
    "RecordKind",
    "ShipmentRecord",
    "ReturnRecord",
    "OrderRecord",
    "ConversionResult",
    # Batch models
    "ExcelFile",
    "FileStatus",
    "FileStat",
    "ProcessingResult",
    "ErrorRecord",
]
