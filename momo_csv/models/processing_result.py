from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

"""Batch result models.

ProcessingResult aggregates the per-file outcomes of one run and feeds the
SUMMARY line; FileStat is the per-file detail kept alongside it.
"""

__all__ = [
    "FileStat",
    "ProcessingResult",
]


@dataclass(frozen=True)
class FileStat:
    """Per-file processing statistics."""
    file_name: str  # 入力ファイル名
    status: str  # success/failed
    row_count: int  # 成功時行数
    elapsed_seconds: float  # ファイル処理時間
    record_kind: str | None = None  # shipment/return
    output_file: str | None = None  # 出力 CSV ファイル名
    error: str | None = None  # 失敗理由


@dataclass(frozen=True)
class ProcessingResult:
    """Aggregated results of one batch run."""
    success_files: int  # 成功ファイル数
    failed_files: int  # 失敗ファイル数
    total_rows: int  # 変換行数合計 (成功ファイルのみ)
    shipment_files: int  # 出貨 (SHPECOM) ファイル数
    return_files: int  # 退貨 (RTN) ファイル数
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float  # end - start
    throughput_rows_per_sec: float  # total_rows / elapsed
    file_stats: list[FileStat] | None = None
    error_log_path: str | None = None  # JSON Lines error log (failures only)

    @property
    def total_files(self) -> int:
        return self.success_files + self.failed_files
