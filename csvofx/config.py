"""Run configuration for the CSV to OFX conversion."""

from __future__ import annotations

import codecs
import json
import os
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Mapping, Optional, Union

import yaml

from csvofx.errors import ConfigError
from csvofx.models import ColumnMapping


ACCOUNT_NUMBER_ENV = "ACCOUNT_NUMBER_OVERRIDE"
DEFAULT_ACCOUNT_NUMBER = "1234567890"


@dataclass(frozen=True)
class ConverterConfig:
    """Settings resolved once at start-up and passed to every stage."""

    column_mapping: ColumnMapping = field(default_factory=ColumnMapping)
    quotechar: str = "|"
    encoding: str = "utf-8-sig"
    account_number: str = DEFAULT_ACCOUNT_NUMBER
    bank_id: str = "000000000"
    currency: str = "USD"
    # Label only; it is not derived from the host timezone.
    tz_offset: str = "-6"
    escape_markup: bool = False


DEFAULT_CONFIG = ConverterConfig()


def load_config(
    config_path: Optional[Union[str, Path]] = None,
    *,
    base_config: ConverterConfig = DEFAULT_CONFIG,
    environ: Optional[Mapping[str, str]] = None,
) -> ConverterConfig:
    """Load a :class:`ConverterConfig` from an optional JSON or YAML file.

    The account number from ``ACCOUNT_NUMBER_OVERRIDE`` wins over both the
    defaults and the file.
    """

    config = base_config
    if config_path is not None:
        config = apply_config_overrides(config, _load_config_data(Path(config_path)))

    env = os.environ if environ is None else environ
    account = (env.get(ACCOUNT_NUMBER_ENV) or "").strip()
    if account:
        config = replace(config, account_number=account)
    return config


def apply_config_overrides(base_config: ConverterConfig, overrides: Mapping[str, Any]) -> ConverterConfig:
    """Create a new :class:`ConverterConfig` by applying overrides to *base_config*."""

    if not overrides:
        return base_config

    known = {f.name for f in fields(ConverterConfig)}
    unknown = sorted(set(overrides) - known)
    if unknown:
        raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")

    changes: dict = {}
    for key, value in overrides.items():
        if key == "column_mapping":
            changes[key] = _merge_column_mapping(base_config.column_mapping, value)
        elif key == "escape_markup":
            if not isinstance(value, bool):
                raise ConfigError("escape_markup must be a boolean")
            changes[key] = value
        else:
            if value is None or isinstance(value, (dict, list, bool)):
                raise ConfigError(f"{key} must be a scalar value")
            changes[key] = str(value)

    quotechar = changes.get("quotechar", base_config.quotechar)
    if len(quotechar) != 1:
        raise ConfigError("quotechar must be a single character")

    encoding = changes.get("encoding", base_config.encoding)
    try:
        codecs.lookup(encoding)
    except LookupError:
        raise ConfigError(f"Unknown encoding: {encoding}") from None

    return replace(base_config, **changes)


def _merge_column_mapping(base: ColumnMapping, override: Any) -> ColumnMapping:
    if not isinstance(override, Mapping):
        raise ConfigError("column_mapping must be a mapping")

    unknown = sorted(set(override) - set(ColumnMapping.field_names()))
    if unknown:
        raise ConfigError(f"Unknown column_mapping fields: {', '.join(unknown)}")

    headers = {}
    for name, header in override.items():
        if not isinstance(header, str) or not header.strip():
            raise ConfigError(f"column_mapping.{name} must be a non-empty header name")
        headers[name] = header
    return replace(base, **headers)


def _load_config_data(path: Path) -> Mapping[str, Any]:
    if not path.exists():
        raise ConfigError(f"Configuration file not found: {path}")

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Cannot read configuration file {path}: {exc}") from exc
    if not text.strip():
        return {}

    suffix = path.suffix.lower()
    try:
        if suffix in {".yaml", ".yml"}:
            data = yaml.safe_load(text)
        elif suffix == ".json":
            data = json.loads(text)
        else:
            raise ConfigError(f"Unsupported configuration file format: {path.suffix}")
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        raise ConfigError(f"Cannot parse configuration file {path}: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise ConfigError("Configuration must be a mapping")
    return data


__all__ = [
    "ACCOUNT_NUMBER_ENV",
    "ConverterConfig",
    "DEFAULT_CONFIG",
    "load_config",
    "apply_config_overrides",
]
