from __future__ import annotations
import json
import re
from pathlib import Path
from momo_csv.logging.error_log import ErrorRecord, ErrorLogBuffer

KEYS = {"timestamp", "file", "sheet", "row", "error_type", "message"}


def test_error_log_buffer_flush(temp_workdir: Path):
    buf = ErrorLogBuffer()
    buf.append(ErrorRecord.create("f1.xlsx", "<FILE_LEVEL>", -1, "WORKBOOK_READ_ERROR", "File is not a zip file"))
    buf.append(ErrorRecord.create("f2.xlsx", "Sheet1", -1, "EMPTY_INPUT", "Excel 檔案內容為空"))
    path = buf.flush()
    assert path is not None and path.exists()
    assert path.parent == Path("./logs")
    assert re.fullmatch(r"errors-\d{8}-\d{6}\.log", path.name)
    lines = path.read_text(encoding="utf-8").strip().splitlines()
    assert len(lines) == 2
    for raw in lines:
        assert set(json.loads(raw).keys()) == KEYS
    # 非 ASCII はエスケープしない
    assert "Excel 檔案內容為空" in lines[1]
    # flush 後バッファクリア
    assert len(buf) == 0


def test_error_log_buffer_empty_flush_writes_nothing(temp_workdir: Path):
    logs_dir = temp_workdir / "custom_logs"
    buf = ErrorLogBuffer(logs_dir)
    assert buf.flush() is None
    assert not logs_dir.exists()


def test_error_log_buffer_multiple_flushes(temp_workdir: Path):
    buf = ErrorLogBuffer(temp_workdir / "custom_logs")
    buf.append(ErrorRecord.create("f.xlsx", "S", -1, "EMPTY_INPUT", "a"))
    path = buf.flush()
    size1 = path.stat().st_size
    buf.append(ErrorRecord.create("f.xlsx", "S", -1, "EMPTY_INPUT", "b"))
    path2 = buf.flush()
    assert path == path2
    assert path2.stat().st_size > size1


def test_error_log_buffer_records_is_copy():
    buf = ErrorLogBuffer()
    buf.append(ErrorRecord.create("f.xlsx", "S", -1, "EMPTY_INPUT", "a"))
    records = buf.records
    records.clear()
    assert len(buf) == 1
