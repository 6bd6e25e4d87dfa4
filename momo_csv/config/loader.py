from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

"""Config loader.

Responsibilities:
- Load YAML config (default config/convert.yml)
- Validate against the bundled JSON schema (config_schema.json)
- Apply defaults (logs_directory, timezone, workers, output options)
"""

__all__ = [
    "ConfigError",
    "OutputOptions",
    "ConvertConfig",
    "load_config",
    "DEFAULT_CONFIG_PATH",
    "SCHEMA_PATH",
]

DEFAULT_CONFIG_PATH = Path("config/convert.yml")
SCHEMA_PATH = Path(__file__).with_name("config_schema.json")

DEFAULT_LOGS_DIRECTORY = "./logs"
DEFAULT_TIMEZONE = "Asia/Taipei"  # ファイル名タイムスタンプは現地時刻
DEFAULT_WORKERS = 1


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class OutputOptions:
    bom: bool = True  # UTF-8 BOM (Excel で文字化けしないように)
    unique_suffix: bool = True  # _NNN random suffix for same-second batches


@dataclass(frozen=True)
class ConvertConfig:
    source_directory: str
    output_directory: str
    logs_directory: str = DEFAULT_LOGS_DIRECTORY
    timezone: str = DEFAULT_TIMEZONE
    workers: int = DEFAULT_WORKERS
    output: OutputOptions = field(default_factory=OutputOptions)

    @property
    def tzinfo(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the bundled JSON schema.

    Raises:
        ConfigError: If the schema file is missing or unreadable, or the config
            data fails validation (missing required keys, wrong types, unknown keys).
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")

    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def load_config(path: Path) -> ConvertConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e

    _validate_config_schema(data)

    tz = data.get("timezone", DEFAULT_TIMEZONE)
    try:
        ZoneInfo(tz)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ConfigError(f"unknown timezone: {tz}") from e

    out_raw = data.get("output") or {}
    return ConvertConfig(
        source_directory=data["source_directory"],
        output_directory=data["output_directory"],
        logs_directory=data.get("logs_directory", DEFAULT_LOGS_DIRECTORY),
        timezone=tz,
        workers=data.get("workers", DEFAULT_WORKERS),
        output=OutputOptions(
            bom=out_raw.get("bom", True),
            unique_suffix=out_raw.get("unique_suffix", True),
        ),
    )
