from __future__ import annotations

from dataclasses import dataclass

from .order_record import RecordKind

__all__ = [
    "ConversionResult",
]


@dataclass(frozen=True)
class ConversionResult:
    """Outcome of converting one sheet's rows.

    Produced once per input file and consumed by the caller for output naming
    (record_kind) and reporting (row_count).
    """
    csv_text: str  # header line + N data lines, "\n" joined, no BOM
    record_kind: RecordKind
    row_count: int  # == len(input rows)
