from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path

from .order_record import RecordKind

"""ExcelFile domain model and FileStatus enum.

ExcelFile is the per-file outcome of a batch: which workbook was converted, into
which record kind, how many rows, where the CSV went, or why it failed. One
file's failure is carried in its own ExcelFile and never affects siblings.
"""


class FileStatus(Enum):
    """Status for one workbook in a batch.

    State transitions: pending → processing → (success | failed)
    """
    PENDING = "pending"
    PROCESSING = "processing"
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class ExcelFile:
    path: Path                                # Source workbook
    name: str                                 # Source file name
    sheet_name: str | None = None             # Converted worksheet (first sheet)
    start_time: datetime | None = None        # Processing start (UTC)
    end_time: datetime | None = None          # Processing end (UTC)
    status: FileStatus = FileStatus.PENDING
    record_kind: RecordKind | None = None     # Shipment / Return (success only)
    row_count: int = 0                        # Converted data rows
    output_path: Path | None = None           # Written CSV (success only)
    error_type: str | None = None             # UPPER_SNAKE classification (failed only)
    error: str | None = None                  # Operator-facing failure message

    @property
    def elapsed_seconds(self) -> float:
        if self.start_time is None or self.end_time is None:
            return 0.0
        return (self.end_time - self.start_time).total_seconds()
