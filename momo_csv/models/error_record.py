from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""ErrorRecord model for the JSON Lines error log.

``row=-1`` marks a file-level error where no specific data row applies (read
failures, empty workbooks, output write failures).
"""

__all__ = [
    "ErrorRecord",
    "FILE_LEVEL_ROW",
    "FILE_LEVEL_SHEET",
]

FILE_LEVEL_ROW = -1
FILE_LEVEL_SHEET = "<FILE_LEVEL>"


@dataclass(frozen=True)
class ErrorRecord:
    """Structured error record for JSON Lines logging.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        file: Excel filename being converted
        sheet: Sheet name within the file ("<FILE_LEVEL>" when unknown)
        row: Row number (1-based). Use -1 for file-level errors
        error_type: Error classification in UPPER_SNAKE_CASE format
        message: Error text shown to the operator
    """
    timestamp: str
    file: str
    sheet: str
    row: int  # 行番号。不明な場合 -1 許容
    error_type: str  # UPPER_SNAKE
    message: str

    @staticmethod
    def create(file: str, sheet: str, row: int, error_type: str, message: str) -> ErrorRecord:
        """Create a new ErrorRecord stamped with the current UTC time."""
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return ErrorRecord(
            timestamp=ts,
            file=file,
            sheet=sheet,
            row=row,
            error_type=error_type,
            message=message,
        )

    @classmethod
    def file_level(cls, file: str, sheet: str | None, error_type: str, message: str) -> ErrorRecord:
        """Record for a failure that applies to the whole workbook (row -1)."""
        return cls.create(file, sheet or FILE_LEVEL_SHEET, FILE_LEVEL_ROW, error_type, message)

    def to_json_line(self) -> str:
        # 追加キー阻止: dataclass -> dict して json.dumps
        return json.dumps(asdict(self), ensure_ascii=False)
