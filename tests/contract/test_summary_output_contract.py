from __future__ import annotations

import re
from pathlib import Path

from momo_csv.cli import main as cli_main

"""SUMMARY 行フォーマット契約テスト."""

SUMMARY_PATTERN = re.compile(
    r"^SUMMARY\s+files=([0-9]+)/(\1)\s+success=([0-9]+)\s+failed=([0-9]+)\s+"
    r"rows=([0-9]+)\s+shipment=([0-9]+)\s+return=([0-9]+)\s+"
    r"elapsed_sec=([0-9]+\.?[0-9]*)\s+throughput_rps=([0-9]+\.?[0-9]*)$"
)


def test_summary_pattern_example_line():
    line = (
        "SUMMARY files=2/2 success=2 failed=0 rows=4 shipment=1 return=1 "
        "elapsed_sec=0.84 throughput_rps=4.762"
    )
    assert SUMMARY_PATTERN.match(line), "SUMMARY line should match contract regex"


def test_cli_emits_exactly_one_summary_line(
    temp_workdir: Path, write_config: Path, make_workbook, shipment_rows, return_rows, capsys
):
    make_workbook(temp_workdir / "data" / "ship.xlsx", shipment_rows)
    make_workbook(temp_workdir / "data" / "rtn.xlsx", return_rows)

    code = cli_main([])

    lines = [ln for ln in capsys.readouterr().out.splitlines() if ln.startswith("SUMMARY")]
    assert code == 0
    assert len(lines) == 1
    m = SUMMARY_PATTERN.match(lines[0])
    assert m
    assert m.group(1) == "2"
    assert (m.group(3), m.group(4), m.group(5), m.group(6), m.group(7)) == ("2", "0", "3", "1", "1")
