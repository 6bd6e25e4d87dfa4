from __future__ import annotations

import csv
import io

from momo_csv.convert.schema import OUTPUT_HEADERS
from momo_csv.convert.serializer import format_value, quote_field, serialize


def test_format_value():
    assert format_value(None) == ""
    assert format_value("") == ""
    assert format_value(100) == "100"
    assert format_value(100.0) == "100"
    assert format_value(12.5) == "12.5"
    assert format_value("A1") == "A1"


def test_quote_field_plain_text_unquoted():
    assert quote_field("Lipstick") == "Lipstick"
    assert quote_field("") == ""


def test_quote_field_special_characters():
    assert quote_field("a,b") == '"a,b"'
    assert quote_field('say "hi"') == '"say ""hi"""'
    assert quote_field("line1\nline2") == '"line1\nline2"'


def test_quote_field_forced():
    assert quote_field("想要換色", force=True) == '"想要換色"'
    assert quote_field("", force=True) == '""'
    assert quote_field('a"b', force=True) == '"a""b"'


def test_serialize_header_and_rows():
    text = serialize(["a", "b"], [{"a": 1, "b": "x"}, {"a": "y,z"}])
    assert text == 'a,b\n1,x\n"y,z",'


def test_serialize_no_trailing_newline_no_bom():
    text = serialize(OUTPUT_HEADERS, [{}])
    assert not text.endswith("\n")
    assert not text.startswith("﻿")
    assert text.count("\n") == 1


def test_serialize_return_reason_always_quoted():
    text = serialize(OUTPUT_HEADERS, [{}])
    row = text.split("\n")[1]
    fields = row.split(",")
    assert len(fields) == 42
    assert fields[OUTPUT_HEADERS.index("退貨原因")] == '""'


def test_serialize_parses_back_with_csv_reader():
    row = {h: "" for h in OUTPUT_HEADERS}
    row["產品名稱"] = 'Foundation, "Matte" 30ml'
    row["退貨原因"] = "想要換色"
    text = serialize(OUTPUT_HEADERS, [row])
    parsed = list(csv.reader(io.StringIO(text)))
    assert parsed[0] == list(OUTPUT_HEADERS)
    assert parsed[1][OUTPUT_HEADERS.index("產品名稱")] == 'Foundation, "Matte" 30ml'
    assert parsed[1][OUTPUT_HEADERS.index("退貨原因")] == "想要換色"
