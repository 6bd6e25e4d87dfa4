from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from .schema import FORCE_QUOTED_COLUMNS

"""CSV rendering for the ERP import file.

csv.writer cannot force quoting for a single column, so quoting is applied per
field here: a field is quoted when its column is force-quoted (退貨原因) or when
its text contains a comma, a double quote or a newline. Lines are joined with
"\\n" and the text carries no trailing newline and no BOM.
"""

__all__ = [
    "serialize",
    "format_value",
    "quote_field",
]

_SPECIAL_CHARS = (",", '"', "\n")


def format_value(value: Any) -> str:
    """Render a cell value as CSV text.

    None renders as "". Integral floats drop the fractional part (100.0 -> "100")
    so numbers keep the text form they had in the spreadsheet.
    """
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def quote_field(text: str, force: bool = False) -> str:
    if force or any(ch in text for ch in _SPECIAL_CHARS):
        return '"' + text.replace('"', '""') + '"'
    return text


def serialize(headers: Sequence[str], rows: Iterable[Mapping[str, Any]]) -> str:
    """Serialize mapped rows to CSV text.

    Args:
        headers: Output column names, in output order
        rows: Mapped rows; a header missing from a row renders as ""

    Returns:
        Header line followed by one line per row, joined by "\\n"
    """
    lines = [",".join(headers)]
    for row in rows:
        lines.append(
            ",".join(
                quote_field(format_value(row.get(h)), force=h in FORCE_QUOTED_COLUMNS)
                for h in headers
            )
        )
    return "\n".join(lines)
