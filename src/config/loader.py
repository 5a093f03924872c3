from __future__ import annotations

import json
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..delimited.header import DEFAULT_HEADER_MARKERS, DEFAULT_MIN_COLUMNS
from ..models.query_state import DEFAULT_PAGE_SIZE

"""Config loader.

Responsibilities:
- Load YAML config (default config/leads.yml)
- Validate against config_schema.json (unknown keys rejected)
- Apply defaults (page_size=20, export_directory=./exports, ...)
- Environment override: LEADS_SOURCE replaces ``source``
"""

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")
DEFAULT_CONFIG_PATH = Path("config/leads.yml")
DEFAULT_EXPORT_DIRECTORY = "./exports"
DEFAULT_REQUEST_TIMEOUT_SEC = 10.0
SOURCE_ENV_VAR = "LEADS_SOURCE"


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class HeaderConfig:
    markers: tuple[str, ...] = DEFAULT_HEADER_MARKERS
    min_columns: int = DEFAULT_MIN_COLUMNS


@dataclass(frozen=True)
class LeadsConfig:
    source: str  # ローカルパス or http(s) URL
    page_size: int = DEFAULT_PAGE_SIZE
    export_directory: str = DEFAULT_EXPORT_DIRECTORY
    request_timeout_sec: float = DEFAULT_REQUEST_TIMEOUT_SEC
    header: HeaderConfig = field(default_factory=HeaderConfig)


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against JSON schema.

    Raises:
        ConfigError: If the schema file is missing or not valid JSON, or the
            config data fails schema validation (missing required keys,
            wrong types, unknown keys).
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


def load_config(path: Path = DEFAULT_CONFIG_PATH, environ: Mapping[str, str] | None = None) -> LeadsConfig:
    if environ is None:
        environ = os.environ
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping: {path}")

    # 環境変数を優先 (.env は CLI 側で先に読み込み済み)
    env_source = environ.get(SOURCE_ENV_VAR)
    if env_source:
        data["source"] = env_source

    _validate_config_schema(data)

    header_raw = data.get("header", {})
    header = HeaderConfig(
        markers=tuple(header_raw.get("markers", DEFAULT_HEADER_MARKERS)),
        min_columns=header_raw.get("min_columns", DEFAULT_MIN_COLUMNS),
    )
    return LeadsConfig(
        source=data["source"],
        page_size=data.get("page_size", DEFAULT_PAGE_SIZE),
        export_directory=data.get("export_directory", DEFAULT_EXPORT_DIRECTORY),
        request_timeout_sec=float(data.get("request_timeout_sec", DEFAULT_REQUEST_TIMEOUT_SEC)),
        header=header,
    )
