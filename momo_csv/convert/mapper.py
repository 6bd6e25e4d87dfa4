from __future__ import annotations

import logging
import math
from collections.abc import Mapping, Sequence
from typing import Any

from ..models.conversion_result import ConversionResult
from ..models.order_record import OrderRecord, RecordKind, ReturnRecord, ShipmentRecord
from . import schema as s
from .dates import order_date, return_date, ship_date
from .serializer import serialize

"""Row classification and column mapping (MOMO export -> ZOHO ERP CSV).

Flow per sheet:
1. classify() once from the first row's 訂單類別
2. map_row() every row into a ShipmentRecord or ReturnRecord
3. project() each record onto the 42 ERP columns
4. serialize() header + rows

Missing or malformed cells never raise; they fall back to "" (text) or 0 (numbers).
"""

logger = logging.getLogger(__name__)

__all__ = [
    "classify",
    "map_row",
    "project",
    "convert",
]

SourceRow = Mapping[str, Any]
OutputRow = dict[str, Any]


def _truthy(value: Any) -> bool:
    # 空セル / None / "" / 0 / NaN はすべて未入力扱い
    if value is None:
        return False
    if isinstance(value, float) and math.isnan(value):
        return False
    try:
        return bool(value)
    except (TypeError, ValueError):
        return True


def _get(row: SourceRow, key: str, default: Any) -> Any:
    value = row.get(key)
    return value if _truthy(value) else default


def _clean_return_reason(value: Any) -> Any:
    """Trim and drop one surrounding double quote on each side.

    The MOMO export sometimes ships the reason already quoted; the serializer
    quotes this column unconditionally, so the source quotes are removed first.
    """
    if not isinstance(value, str):
        return value
    text = value.strip()
    if text.startswith('"'):
        text = text[1:]
    if text.endswith('"'):
        text = text[:-1]
    return text


def classify(rows: Sequence[SourceRow]) -> RecordKind:
    """Decide the sheet-wide record kind from the first row's 訂單類別."""
    if rows:
        category = rows[0].get(s.SRC_CATEGORY)
        if _truthy(category) and s.RETURN_CATEGORY_MARKER in str(category):
            return RecordKind.RETURN
    return RecordKind.SHIPMENT


def map_row(row: SourceRow, kind: RecordKind) -> OrderRecord:
    order_id = _get(row, s.SRC_ORDER_ID, "")
    sku = _get(row, s.SRC_SKU, "")

    if kind is RecordKind.RETURN:
        return ReturnRecord(
            order_id=order_id,
            sku=sku,
            return_updated_at=return_date(row.get(s.SRC_RETURN_DELIVERED_ON)),
            return_reason=_clean_return_reason(_get(row, s.SRC_RETURN_REASON, "")),
        )

    return ShipmentRecord(
        order_id=order_id,
        sku=sku,
        price=_get(row, s.SRC_PRICE, 0),
        customer=_get(row, s.SRC_RECIPIENT, ""),
        shipped_at=ship_date(row.get(s.SRC_SHIPPED_ON)),
        quantity=_get(row, s.SRC_QUANTITY, 0),
        settlement_amount=_get(row, s.SRC_COST, 0),
        product_name=_get(row, s.SRC_PRODUCT_NAME, ""),
        order_date=order_date(row.get(s.SRC_TRANSFERRED_ON)),
    )


def project(record: OrderRecord) -> OutputRow:
    """Expand a compact record onto the full ERP column layout ("" when unset)."""
    out: OutputRow = {h: "" for h in s.OUTPUT_HEADERS}
    out.update(record.columns())
    return out


def convert(rows: Sequence[SourceRow]) -> ConversionResult:
    """Convert one sheet's rows into ERP CSV text.

    Callers must reject empty input beforehand (the orchestrator raises
    EmptyInputError); classification, mapping and row order follow the sheet
    as given.

    Args:
        rows: Decoded data rows (header row excluded)

    Returns:
        ConversionResult with CSV text, record kind and row count
    """
    kind = classify(rows)
    output_rows = [project(map_row(row, kind)) for row in rows]
    logger.debug("convert kind=%s rows=%d", kind.value, len(output_rows))
    return ConversionResult(
        csv_text=serialize(s.OUTPUT_HEADERS, output_rows),
        record_kind=kind,
        row_count=len(rows),
    )
