"""MOMO order spreadsheet -> ZOHO ERP CSV converter."""

__version__ = "0.1.0"
