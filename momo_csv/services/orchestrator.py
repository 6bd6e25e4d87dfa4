from __future__ import annotations

import logging
import random
from collections.abc import Iterator, Sequence
from concurrent.futures import ThreadPoolExecutor
from datetime import UTC, datetime
from pathlib import Path

from ..config.loader import ConvertConfig, OutputOptions
from ..convert.mapper import convert
from ..excel.reader import read_excel_file
from ..logging.error_log import ErrorLogBuffer
from ..models.error_record import ErrorRecord
from ..models.excel_file import ExcelFile, FileStatus
from ..models.order_record import RecordKind
from ..models.processing_result import FileStat, ProcessingResult
from .naming import build_output_filename, file_prefix, kind_label
from .progress import ProgressTracker

logger = logging.getLogger(__name__)

"""Batch orchestration for MOMO -> ZOHO ERP conversion.

Each workbook is an independent unit of work:
read -> empty check -> convert -> name -> write.
Whatever goes wrong inside one unit is captured in that file's ExcelFile outcome
(and an ErrorRecord); sibling files are unaffected. Outcomes are joined into one
ProcessingResult at the end.
"""

__all__ = [
    "ProcessingError",
    "EmptyInputError",
    "OutputWriteError",
    "scan_excel_files",
    "write_output",
    "convert_file",
    "process_all",
]

EMPTY_INPUT_MESSAGE = "Excel 檔案內容為空"
CONVERSION_FAILED_MESSAGE = "轉檔失敗"
EXCEL_SUFFIXES = (".xlsx",)
UTF8_BOM = "﻿"
# _NNN suffix の再抽選上限 (同一秒・同一種別の衝突回避)
MAX_NAME_ATTEMPTS = 20


class ProcessingError(Exception):
    """Fatal batch error (bad source directory); aborts the whole run."""
    pass


class EmptyInputError(Exception):
    """The first worksheet has no data rows."""

    def __init__(self, message: str = EMPTY_INPUT_MESSAGE) -> None:
        super().__init__(message)


class OutputWriteError(Exception):
    """The converted CSV could not be written."""
    pass


def scan_excel_files(directory: Path) -> list[Path]:
    """Scan directory for .xlsx files (non-recursive, sorted by name).

    Raises:
        ProcessingError: If directory doesn't exist or can't be read
    """
    if not directory.exists():
        raise ProcessingError(f"Directory not found: {directory}")

    if not directory.is_dir():
        raise ProcessingError(f"Path is not a directory: {directory}")

    try:
        return sorted(
            (p for p in directory.iterdir() if p.is_file() and p.suffix.lower() in EXCEL_SUFFIXES),
            key=lambda p: p.name,
        )
    except OSError as e:
        raise ProcessingError(f"Error reading directory {directory}: {e}") from e


def write_output(
    csv_text: str,
    output_dir: Path,
    kind: RecordKind,
    now: datetime,
    options: OutputOptions,
    rng: random.Random | None = None,
) -> Path:
    """Write converted CSV text under a fresh file name.

    Files are created exclusively, so an existing file is never overwritten; on a
    name collision the random suffix is drawn again.

    Raises:
        OutputWriteError: On I/O failure, or when no free name was found
    """
    data = UTF8_BOM + csv_text if options.bom else csv_text
    attempts = MAX_NAME_ATTEMPTS if options.unique_suffix else 1
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        for _ in range(attempts):
            name = build_output_filename(kind, now, unique_suffix=options.unique_suffix, rng=rng)
            path = output_dir / name
            try:
                with path.open("x", encoding="utf-8", newline="") as f:
                    f.write(data)
            except FileExistsError:
                logger.debug("output name taken, retrying: %s", name)
                continue
            return path
    except OSError as e:
        raise OutputWriteError(f"cannot write output in {output_dir}: {e}") from e
    raise OutputWriteError(f"no free output file name for {file_prefix(kind)} in {output_dir}")


def _failed(
    file_path: Path,
    start_time: datetime,
    error_type: str,
    exc: BaseException,
    sheet_name: str | None = None,
) -> ExcelFile:
    return ExcelFile(
        path=file_path,
        name=file_path.name,
        sheet_name=sheet_name,
        start_time=start_time,
        end_time=datetime.now(UTC),
        status=FileStatus.FAILED,
        error_type=error_type,
        error=str(exc) or CONVERSION_FAILED_MESSAGE,
    )


def convert_file(
    file_path: Path,
    config: ConvertConfig,
    *,
    now: datetime | None = None,
    rng: random.Random | None = None,
) -> ExcelFile:
    """Convert a single workbook and write its CSV.

    Never raises: every failure becomes a FAILED ExcelFile carrying an
    error_type (WORKBOOK_READ_ERROR, EMPTY_INPUT, OUTPUT_WRITE_ERROR,
    CONVERSION_ERROR) and the operator-facing message.

    Args:
        file_path: Workbook to convert
        config: Run configuration (output directory, timezone, output options)
        now: Timestamp for the output name; defaults to now in config.timezone
        rng: Random source for the file name suffix

    Returns:
        ExcelFile describing the outcome
    """
    start_time = datetime.now(UTC)

    try:
        sheet = read_excel_file(file_path)
    except Exception as e:
        logger.debug("read failed file=%s", file_path.name, exc_info=True)
        return _failed(file_path, start_time, "WORKBOOK_READ_ERROR", e)

    try:
        if not sheet.rows:
            raise EmptyInputError()
        result = convert(sheet.rows)
        stamp = now if now is not None else datetime.now(config.tzinfo)
        output_path = write_output(
            result.csv_text,
            Path(config.output_directory),
            result.record_kind,
            stamp,
            config.output,
            rng=rng,
        )
    except EmptyInputError as e:
        return _failed(file_path, start_time, "EMPTY_INPUT", e, sheet.sheet_name)
    except OutputWriteError as e:
        return _failed(file_path, start_time, "OUTPUT_WRITE_ERROR", e, sheet.sheet_name)
    except Exception as e:
        logger.debug("conversion failed file=%s", file_path.name, exc_info=True)
        return _failed(file_path, start_time, "CONVERSION_ERROR", e, sheet.sheet_name)

    return ExcelFile(
        path=file_path,
        name=file_path.name,
        sheet_name=sheet.sheet_name,
        start_time=start_time,
        end_time=datetime.now(UTC),
        status=FileStatus.SUCCESS,
        record_kind=result.record_kind,
        row_count=result.row_count,
        output_path=output_path,
    )


def _run(
    file_paths: Sequence[Path],
    config: ConvertConfig,
    rng: random.Random | None,
) -> Iterator[ExcelFile]:
    """Yield outcomes in input order, serially or from a thread pool."""
    workers = min(config.workers, len(file_paths))
    if workers <= 1:
        for path in file_paths:
            yield convert_file(path, config, rng=rng)
        return

    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="convert") as pool:
        futures = [pool.submit(convert_file, path, config, rng=rng) for path in file_paths]
        for future in futures:
            yield future.result()


def process_all(
    config: ConvertConfig,
    files: Sequence[Path] | None = None,
    *,
    rng: random.Random | None = None,
) -> ProcessingResult:
    """Convert a batch of workbooks.

    1. Use the given files, or scan config.source_directory for .xlsx files
    2. Convert each file independently (see convert_file)
    3. Log each outcome and buffer failures into the JSON Lines error log
    4. Return the aggregated ProcessingResult

    Raises:
        ProcessingError: When the source directory is missing or unreadable
    """
    start_time = datetime.now(UTC)
    error_log = ErrorLogBuffer(Path(config.logs_directory))

    if files is None:
        file_paths = scan_excel_files(Path(config.source_directory))
    else:
        file_paths = [Path(f) for f in files]

    file_stats: list[FileStat] = []
    kind_counts = {RecordKind.SHIPMENT: 0, RecordKind.RETURN: 0}

    with ProgressTracker(len(file_paths)) as progress:
        for outcome in _run(file_paths, config, rng):
            ok = outcome.status is FileStatus.SUCCESS
            progress.advance(outcome.name, success=ok, rows=outcome.row_count)

            if ok and outcome.record_kind is not None:
                kind_counts[outcome.record_kind] += 1
                logger.info(
                    "%s: %s rows=%d -> %s",
                    outcome.name,
                    kind_label(file_prefix(outcome.record_kind)),
                    outcome.row_count,
                    outcome.output_path.name if outcome.output_path else "",
                )
            else:
                logger.error("%s: %s", outcome.name, outcome.error)
                error_log.append(
                    ErrorRecord.file_level(
                        outcome.name,
                        outcome.sheet_name,
                        outcome.error_type or "CONVERSION_ERROR",
                        outcome.error or CONVERSION_FAILED_MESSAGE,
                    )
                )

            file_stats.append(
                FileStat(
                    file_name=outcome.name,
                    status=outcome.status.value,
                    row_count=outcome.row_count,
                    elapsed_seconds=outcome.elapsed_seconds,
                    record_kind=outcome.record_kind.value if outcome.record_kind else None,
                    output_file=outcome.output_path.name if outcome.output_path else None,
                    error=outcome.error,
                )
            )

    error_log_path: Path | None = None
    try:
        error_log_path = error_log.flush()
    except OSError as e:
        # ログ書き込み失敗で変換結果は失わない
        logger.warning("failed to write error log: %s", e)

    end_time = datetime.now(UTC)
    elapsed_seconds = (end_time - start_time).total_seconds()
    throughput_rps = progress.rows / elapsed_seconds if elapsed_seconds > 0 else 0.0

    return ProcessingResult(
        success_files=progress.success,
        failed_files=progress.failed,
        total_rows=progress.rows,
        shipment_files=kind_counts[RecordKind.SHIPMENT],
        return_files=kind_counts[RecordKind.RETURN],
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=elapsed_seconds,
        throughput_rows_per_sec=throughput_rps,
        file_stats=file_stats,
        error_log_path=str(error_log_path) if error_log_path else None,
    )
