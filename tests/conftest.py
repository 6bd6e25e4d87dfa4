# Shared pytest fixtures
from __future__ import annotations
import tempfile
from pathlib import Path
from typing import Any, Callable

import pandas as pd
import pytest

from momo_csv.logging.init import reset_logging


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture(autouse=True)
def _clean_logging(monkeypatch):
    # setup_logging はプロセス内で一度だけ構成されるため毎テストでリセット
    monkeypatch.delenv("MOMO_CSV_CONFIG", raising=False)
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def sample_config_yaml() -> str:
    return """source_directory: ./data
output_directory: ./output
logs_directory: ./logs
timezone: Asia/Taipei
workers: 1
output:
  bom: true
  unique_suffix: true
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "convert.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def shipment_rows() -> list[dict[str, Any]]:
    return [
        {
            "訂單類別": "出貨",
            "訂單編號": "A1",
            "商品原廠編號": "SKU1",
            "售價(含稅)": 100,
            "收件人姓名": "王小明",
            "數量": 2,
            "進價(含稅)": 50,
            "品名": "Lipstick",
            "實際出貨日": "2025/07/10",
            "轉單日": "2025/07/09",
        },
        {
            "訂單類別": "出貨",
            "訂單編號": "A2",
            "商品原廠編號": "SKU9",
            "售價(含稅)": 1250,
            "收件人姓名": "陳美玲",
            "數量": 1,
            "進價(含稅)": 800,
            "品名": "Foundation, 30ml",
            "實際出貨日": "2025/07/11",
            "轉單日": "2025/07/10",
        },
    ]


@pytest.fixture()
def return_rows() -> list[dict[str, Any]]:
    return [
        {
            "訂單類別": "退貨",
            "訂單編號": "B2",
            "商品原廠編號": "SKU2",
            "回收送達日": "2025/07/10",
            "退貨原因": '"想要換色"',
        },
    ]


@pytest.fixture()
def make_workbook() -> Callable[..., Path]:
    """Create a real .xlsx (first sheet, header row + data rows)."""

    def _make(path: Path, rows: list[dict[str, Any]], columns: list[str] | None = None,
              sheet_name: str = "Sheet1") -> Path:
        df = pd.DataFrame(rows, columns=columns)
        with pd.ExcelWriter(path, engine="openpyxl") as writer:
            df.to_excel(writer, sheet_name=sheet_name, index=False)
        return path

    return _make
