from __future__ import annotations

import random
from datetime import datetime

from ..models.order_record import RecordKind

"""Output file naming for converted CSVs.

    {prefix}_{YYYYMMDDHHmmss}[_{NNN}].csv

The prefix tells the ERP import job (and the operator) which kind of file it is:
RTN02 for returns, SHPECOM for shipments.
"""

__all__ = [
    "FILE_PREFIXES",
    "file_prefix",
    "kind_label",
    "filename_timestamp",
    "build_output_filename",
]

FILE_PREFIXES: dict[RecordKind, str] = {
    RecordKind.RETURN: "MUFE_MOMO_ZOHO_RTN02",
    RecordKind.SHIPMENT: "MUFE_MOMO_ZOHO_SHPECOM",
}

TIMESTAMP_FMT = "%Y%m%d%H%M%S"


def file_prefix(kind: RecordKind) -> str:
    return FILE_PREFIXES[kind]


def kind_label(prefix: str) -> str:
    """Operator-facing label derived from the file prefix."""
    return "退貨 (RTN)" if "RTN" in prefix else "出貨 (SHPECOM)"


def filename_timestamp(now: datetime) -> str:
    return now.strftime(TIMESTAMP_FMT)


def build_output_filename(
    kind: RecordKind,
    now: datetime,
    *,
    unique_suffix: bool = True,
    rng: random.Random | None = None,
) -> str:
    """Build the CSV file name for a converted sheet.

    Args:
        kind: Record kind of the converted sheet
        now: Timestamp used for the name (already in the configured timezone)
        unique_suffix: Append a random 3-digit suffix (000-999)
        rng: Random source for the suffix (tests pass a seeded one)

    Returns:
        File name without directory
    """
    name = f"{file_prefix(kind)}_{filename_timestamp(now)}"
    if unique_suffix:
        r = rng if rng is not None else random
        name += f"_{r.randint(0, 999):03d}"
    return f"{name}.csv"
