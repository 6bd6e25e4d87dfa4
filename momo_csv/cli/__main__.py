from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from momo_csv.config.loader import DEFAULT_CONFIG_PATH, ConfigError, ConvertConfig, load_config
from momo_csv.logging.init import log_summary, set_level, setup_logging
from momo_csv.services.orchestrator import ProcessingError, process_all, scan_excel_files
from momo_csv.services.summary import render_summary_line

"""CLI entrypoint.

Flow:
- Load .env, then the YAML config (--config > MOMO_CSV_CONFIG > config/convert.yml)
- Convert the given workbooks, or every .xlsx in source_directory
- Print one SUMMARY line and exit with the batch exit code
"""

EXIT_SUCCESS_ALL = 0
EXIT_FATAL = 1
EXIT_PARTIAL_FAILURE = 2

CONFIG_ENV_VAR = "MOMO_CSV_CONFIG"
INSPECT_SAMPLE_ROWS = 3


def _load_env_file(path: Path, override: bool = False) -> None:
    """Load .env using python-dotenv.

    失敗時は警告を出すのみで続行。
    """
    try:
        if path.exists():
            load_dotenv(dotenv_path=path, override=override)
    except (OSError, UnicodeDecodeError) as e:  # pragma: no cover
        print(f"WARNING: failed to load .env via python-dotenv: {e}")


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="momo-csv",
        description="MOMO order spreadsheet -> ZOHO ERP CSV converter",
    )
    p.add_argument("--config", type=Path, default=None, help="Path to the YAML config file")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--inspect-data", action="store_true", help="Print sheet headers & first rows then exit")
    p.add_argument("files", nargs="*", type=Path, help="Workbooks to convert (default: every .xlsx in source_directory)")
    return p.parse_args(argv)


def _resolve_config_path(args: argparse.Namespace) -> Path:
    if args.config is not None:
        return args.config
    env_path = os.getenv(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)
    return DEFAULT_CONFIG_PATH


def _inspect_data(cfg: ConvertConfig, files: list[Path]) -> int:
    from momo_csv.convert.mapper import classify
    from momo_csv.excel.reader import read_excel_file

    if not files:
        try:
            files = scan_excel_files(Path(cfg.source_directory))
        except ProcessingError as e:
            print(f"inspect: {e}")
            return EXIT_FATAL
    if not files:
        print("inspect: no .xlsx files")
        return EXIT_SUCCESS_ALL
    for f in files:
        print(f"FILE: {f.name}")
        try:
            sheet = read_excel_file(f)
        except Exception as e:  # pragma: no cover
            print(f"  read_error: {e}")
            continue
        kind = classify(sheet.rows).value if sheet.rows else "-"
        print(f"  SHEET: {sheet.sheet_name} kind={kind} rows={len(sheet.rows)} cols={sheet.columns}")
        # datetime 含む場合 JSON 化できないため isoformat で表示
        safe_rows = [
            {k: (v.isoformat() if hasattr(v, "isoformat") else v) for k, v in r.items()}
            for r in sheet.rows[:INSPECT_SAMPLE_ROWS]
        ]
        print("    sample_rows=", safe_rows)
    return EXIT_SUCCESS_ALL


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # 空リスト [] (テストの cli_main([])) で sys.argv を読まないよう None のみ判定
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)

    if args.debug:
        set_level(logging.DEBUG)
        logger.debug("debug mode enabled")

    _load_env_file(Path(".env"))
    config_path = _resolve_config_path(args)
    try:
        cfg = load_config(config_path)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    files: list[Path] = list(args.files)

    if args.inspect_data:
        return _inspect_data(cfg, files)

    if files:
        logger.info(f"Processing {len(files)} file(s)")
    else:
        logger.info(f"Processing files from: {cfg.source_directory}")

    try:
        result = process_all(cfg, files or None)
    except ProcessingError as e:
        logger.error(f"processing: {e}")
        return EXIT_FATAL

    if result.error_log_path:
        logger.info(f"error log: {result.error_log_path}")

    summary_line = render_summary_line(result.total_files, result)
    # log_summary が "SUMMARY " を付けるので除去して渡す
    log_summary(summary_line[len("SUMMARY "):])

    if result.failed_files > 0:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
