from __future__ import annotations

import random
import re
from datetime import datetime

from momo_csv.models import RecordKind
from momo_csv.services.naming import build_output_filename, file_prefix, filename_timestamp, kind_label

NOW = datetime(2025, 7, 10, 15, 4, 5)


def test_file_prefix():
    assert file_prefix(RecordKind.RETURN) == "MUFE_MOMO_ZOHO_RTN02"
    assert file_prefix(RecordKind.SHIPMENT) == "MUFE_MOMO_ZOHO_SHPECOM"


def test_kind_label():
    assert kind_label("MUFE_MOMO_ZOHO_RTN02") == "退貨 (RTN)"
    assert kind_label("MUFE_MOMO_ZOHO_SHPECOM") == "出貨 (SHPECOM)"


def test_filename_timestamp():
    assert filename_timestamp(NOW) == "20250710150405"


def test_build_output_filename_with_suffix():
    name = build_output_filename(RecordKind.SHIPMENT, NOW, rng=random.Random(1))
    assert re.fullmatch(r"MUFE_MOMO_ZOHO_SHPECOM_20250710150405_\d{3}\.csv", name)


def test_build_output_filename_suffix_is_zero_padded():
    class _Fixed:
        def randint(self, a, b):
            return 7

    name = build_output_filename(RecordKind.RETURN, NOW, rng=_Fixed())
    assert name == "MUFE_MOMO_ZOHO_RTN02_20250710150405_007.csv"


def test_build_output_filename_without_suffix():
    name = build_output_filename(RecordKind.RETURN, NOW, unique_suffix=False)
    assert name == "MUFE_MOMO_ZOHO_RTN02_20250710150405.csv"
