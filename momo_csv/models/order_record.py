from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

from ..convert import schema as s

"""Order record models for MOMO -> ZOHO ERP conversion.

A sheet is either a shipment export or a return export. Each kind keeps only the
fields it actually populates; the expansion to the full 42-column ERP layout is
done once, by ``momo_csv.convert.mapper.project``.
"""

__all__ = [
    "RecordKind",
    "ShipmentRecord",
    "ReturnRecord",
    "OrderRecord",
]


class RecordKind(Enum):
    """Sheet-wide record classification.

    - SHIPMENT: completed outbound deliveries (出貨)
    - RETURN: processed product returns (退貨)
    """
    SHIPMENT = "shipment"
    RETURN = "return"


@dataclass(frozen=True)
class ShipmentRecord:
    """Fields populated for a shipment row."""
    order_id: Any
    sku: Any
    price: Any  # 商品售價 / 折扣後實收總價 / 產品單價 share this value
    customer: Any
    shipped_at: str  # YYYY/MM/DD 15:00:00 or ""
    quantity: Any
    settlement_amount: Any
    product_name: Any
    order_date: str  # YYYY/MM/DD or ""

    kind = RecordKind.SHIPMENT

    def columns(self) -> dict[str, Any]:
        return {
            s.COL_OMNI_ORDER_ID: self.order_id,
            s.COL_SKU: self.sku,
            s.COL_MAIN_STATUS: s.STATUS_SHIPPED,
            s.COL_MAIN_ORDER_ID: self.order_id,
            s.COL_SOURCE_PLATFORM: s.PLATFORM_MOMO,
            s.COL_BRAND: s.BRAND_MUFE,
            s.COL_SALE_PRICE: self.price,
            s.COL_CUSTOMER: self.customer,
            s.COL_SHIPPED_AT: self.shipped_at,
            s.COL_PLATFORM_NAME: s.PLATFORM_MOMO,
            s.COL_NET_TOTAL: self.price,
            s.COL_QUANTITY: self.quantity,
            s.COL_SETTLEMENT: self.settlement_amount,
            s.COL_PRODUCT_NAME: self.product_name,
            s.COL_UNIT_PRICE: self.price,
            s.COL_ORDER_DATE: self.order_date,
            s.COL_SALES_ORDER_STATUS: s.STATUS_SHIPPED,
            s.COL_SALES_ORDER_ID: self.order_id,
        }


@dataclass(frozen=True)
class ReturnRecord:
    """Fields populated for a return row.

    The order id goes to 銷售訂單編號 only; the Omni ERP / 主單 columns stay empty.
    """
    order_id: Any
    sku: Any
    return_updated_at: str  # YYYY/MM/DD 11:00:00 or ""
    return_reason: Any

    kind = RecordKind.RETURN

    def columns(self) -> dict[str, Any]:
        return {
            s.COL_SKU: self.sku,
            s.COL_RETURN_UPDATED_AT: self.return_updated_at,
            s.COL_SALES_ORDER_STATUS: s.STATUS_RETURN_CLOSED,
            s.COL_SALES_ORDER_ID: self.order_id,
            s.COL_RETURN_REASON: self.return_reason,
        }


OrderRecord = Union[ShipmentRecord, ReturnRecord]
