from __future__ import annotations

"""Fixed column layout of the ZOHO ERP order import CSV and MOMO source keys.

The output header order is part of the downstream import contract: 42 columns,
exactly in this order. Source keys are the header names of the MOMO backend
export (row 1 of the workbook).
"""

__all__ = [
    "OUTPUT_HEADERS",
    "FORCE_QUOTED_COLUMNS",
]

OUTPUT_HEADERS: tuple[str, ...] = (
    "Omni ERP 系統訂單編號",
    "SKU ID",
    "主單狀態",
    "主單編號",
    "來源平台",
    "品牌",
    "商品售價",
    "客戶名稱",
    "已出貨狀態時間",
    "平台名稱",
    "折扣後實收總價",
    "數量",
    "核帳金額",
    "產品名稱",
    "產品單價",
    "訂購日期",
    "退貨狀態更新時間",
    "銷售訂單狀態",
    "銷售訂單編號",
    "退貨申請日",
    "退貨原因",
    "地址",
    "LFL 配送代碼",
    "平台預計出貨日",
    "批次更新",
    "收件人",
    "收件人電話",
    "標籤",
    "準備出貨狀態時間",
    "物流方式",
    "缺貨狀態更新時間",
    "訂單取消狀態時間",
    "超取門市退貨日",
    "超取門市進貨日",
    "部分取消狀態時間",
    "郵遞區號",
    "配送條碼",
    "配送編號",
    "銷售訂單分配數",
    "門市代碼",
    "門市名稱",
    "預計到貨時間",
)

# ERP 側の要件: 退貨原因 は内容に関わらず常にダブルクォートで囲む
FORCE_QUOTED_COLUMNS: frozenset[str] = frozenset({"退貨原因"})

# --- Output column names referenced by the mapping rules ---
COL_OMNI_ORDER_ID = "Omni ERP 系統訂單編號"
COL_SKU = "SKU ID"
COL_MAIN_STATUS = "主單狀態"
COL_MAIN_ORDER_ID = "主單編號"
COL_SOURCE_PLATFORM = "來源平台"
COL_BRAND = "品牌"
COL_SALE_PRICE = "商品售價"
COL_CUSTOMER = "客戶名稱"
COL_SHIPPED_AT = "已出貨狀態時間"
COL_PLATFORM_NAME = "平台名稱"
COL_NET_TOTAL = "折扣後實收總價"
COL_QUANTITY = "數量"
COL_SETTLEMENT = "核帳金額"
COL_PRODUCT_NAME = "產品名稱"
COL_UNIT_PRICE = "產品單價"
COL_ORDER_DATE = "訂購日期"
COL_RETURN_UPDATED_AT = "退貨狀態更新時間"
COL_SALES_ORDER_STATUS = "銷售訂單狀態"
COL_SALES_ORDER_ID = "銷售訂單編號"
COL_RETURN_REASON = "退貨原因"

# --- MOMO export source keys ---
SRC_CATEGORY = "訂單類別"
SRC_ORDER_ID = "訂單編號"
SRC_SKU = "商品原廠編號"
SRC_PRICE = "售價(含稅)"
SRC_RECIPIENT = "收件人姓名"
SRC_QUANTITY = "數量"
SRC_COST = "進價(含稅)"
SRC_PRODUCT_NAME = "品名"
SRC_SHIPPED_ON = "實際出貨日"
SRC_TRANSFERRED_ON = "轉單日"
SRC_RETURN_DELIVERED_ON = "回收送達日"
SRC_RETURN_REASON = "退貨原因"

# --- Literal values expected by the ERP import ---
RETURN_CATEGORY_MARKER = "退貨"
STATUS_SHIPPED = "已出貨"
STATUS_RETURN_CLOSED = "退貨結案"
PLATFORM_MOMO = "MOMO"
BRAND_MUFE = "MUFE"
