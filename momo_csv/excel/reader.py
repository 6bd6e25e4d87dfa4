from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any

import pandas as pd

"""Excel reader for MOMO backend exports.

The first worksheet is read with pandas (openpyxl engine); row 1 is the header and
every following non-blank row becomes one SourceRow (header name -> cell value).

Cell normalization:
- empty cells (NaN / NaT) are left out of the row mapping
- integral floats become int (5225.0 -> 5225), numpy scalars become Python scalars
- pandas.Timestamp becomes datetime

Decoding errors (corrupt or non-Excel bytes) are not wrapped; they reach the
caller unchanged.
"""

__all__ = [
    "SheetData",
    "read_excel_file",
    "normalize_cell",
]

# pandas が空ヘッダセルに付ける仮の列名
_PLACEHOLDER_PREFIX = "Unnamed:"


@dataclass(frozen=True)
class SheetData:
    sheet_name: str
    columns: list[str]
    rows: list[dict[str, Any]]  # 列名→値 (空セルはキーなし)


def _is_missing(value: Any) -> bool:
    if value is None or value is pd.NaT:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def normalize_cell(value: Any) -> Any:
    """Convert a raw pandas cell into a plain Python scalar (None when empty)."""
    if _is_missing(value):
        return None
    if isinstance(value, pd.Timestamp):
        return value.to_pydatetime()
    if isinstance(value, (str, datetime)):
        return value
    if isinstance(value, numbers.Integral):
        return int(value)
    if isinstance(value, numbers.Real):
        as_float = float(value)
        if as_float.is_integer():
            return int(as_float)
        return as_float
    return value


def read_excel_file(path: Path, sheet_name: str | int = 0) -> SheetData:
    """Read one worksheet of an Excel file into SourceRow mappings.

    Parameters
    ----------
    path: Excel ファイルパス
    sheet_name: 対象シート (既定は先頭シート)
    """
    with pd.ExcelFile(path) as xls:
        if isinstance(sheet_name, int):
            resolved_name = str(xls.sheet_names[sheet_name])
        else:
            resolved_name = sheet_name
        df = xls.parse(resolved_name, header=0, dtype=object)

    columns: list[str] = []
    keep: list[tuple[Any, str]] = []
    for raw_name in df.columns:
        name = str(raw_name).strip()
        if not name or name.startswith(_PLACEHOLDER_PREFIX):
            continue
        columns.append(name)
        keep.append((raw_name, name))

    rows: list[dict[str, Any]] = []
    for record in df.to_dict(orient="records"):
        row: dict[str, Any] = {}
        for raw_name, name in keep:
            value = normalize_cell(record.get(raw_name))
            if value is None:
                continue
            row[name] = value
        # 全セル空の行はスキップ
        if not row:
            continue
        rows.append(row)

    return SheetData(sheet_name=resolved_name, columns=columns, rows=rows)
