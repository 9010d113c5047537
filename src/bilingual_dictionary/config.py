"""
Configuration loading for bilingual-dictionary.

Settings come from built-in defaults, then an optional YAML file, then
environment variables, each layer overriding the previous one.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml

from .exceptions import ConfigError

DEFAULT_DATABASE = "dictionary.db"

# Environment variable -> config field
ENV_VARS: Dict[str, str] = {
    "DICTIONARY_DB": "database",
    "DICTIONARY_MAX_FETCH_WORKERS": "max_fetch_workers",
    "DICTIONARY_LOG_LEVEL": "log_level",
}
CONFIG_PATH_ENV = "DICTIONARY_CONFIG"


@dataclass(frozen=True)
class DictionaryConfig:
    """Runtime settings."""
    database: str = DEFAULT_DATABASE
    max_fetch_workers: Optional[int] = None
    log_level: str = "WARNING"


def load_config(
    path: Union[str, Path, None] = None,
    env: Optional[Mapping[str, str]] = None,
) -> DictionaryConfig:
    """Build the configuration.

    Args:
        path: YAML file to read. Defaults to the file named by
            ``DICTIONARY_CONFIG``, if set.
        env: Environment mapping (defaults to ``os.environ``)

    Raises:
        ConfigError: If the file is missing or malformed, or a value is invalid
    """
    if env is None:
        env = os.environ
    if path is None and env.get(CONFIG_PATH_ENV):
        path = env[CONFIG_PATH_ENV]

    values: Dict[str, Any] = {}
    if path is not None:
        values.update(_load_yaml_file(Path(path)))
    for var, name in ENV_VARS.items():
        if env.get(var):
            values[name] = env[var]

    return _validate(replace(DictionaryConfig(), **values))


def _load_yaml_file(path: Path) -> Dict[str, Any]:
    """Load config keys from a YAML file."""
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError("Config root must be a mapping (dictionary)")

    known = {f.name for f in fields(DictionaryConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"Unknown config keys: {', '.join(unknown)}")
    return data


def _validate(config: DictionaryConfig) -> DictionaryConfig:
    database = str(config.database)
    if not database:
        raise ConfigError("'database' cannot be empty")

    workers = config.max_fetch_workers
    if workers is not None:
        try:
            workers = int(workers)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"'max_fetch_workers' must be an integer: {workers!r}") from e
        if workers < 1:
            raise ConfigError(f"'max_fetch_workers' must be positive: {workers}")

    level = str(config.log_level).upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ConfigError(f"Unknown log level: {config.log_level!r}")

    return replace(config, database=database, max_fetch_workers=workers, log_level=level)
