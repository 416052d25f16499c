"""YAML configuration supplying extra negative filters.

Example ``~/.config/dotfind/config.yaml``::

    exclude_names:
      - ..pyc
      - .ds_store
    exclude_paths:
      - ..node_modules..
      - ../.git/..

The patterns are dot patterns and are added to the command-line filters
as negative name and path filters.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Final

import yaml

from dotfind import ConfigError

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR: Final = "DOTFIND_CONFIG"
EXCLUDE_NAMES_KEY: Final = "exclude_names"
EXCLUDE_PATHS_KEY: Final = "exclude_paths"


@dataclass(frozen=True, slots=True)
class SearchConfig:
    """Filters loaded from a configuration file.

    Attributes:
        exclude_names: Negative file-name dot patterns.
        exclude_paths: Negative path dot patterns.
    """

    exclude_names: tuple[str, ...] = ()
    exclude_paths: tuple[str, ...] = ()


def default_config_path() -> Path:
    """Return ``$DOTFIND_CONFIG`` or ``~/.config/dotfind/config.yaml``."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".config" / "dotfind" / "config.yaml"


def _pattern_list(data: dict[str, Any], key: str, path: Path) -> tuple[str, ...]:
    value = data.get(key)
    if value is None:
        return ()
    if not isinstance(value, list):
        raise ConfigError(f"'{key}' must be a list in {path}")
    for item in value:
        if not isinstance(item, str):
            raise ConfigError(f"'{key}' entries must be strings in {path}: {item!r}")
    return tuple(value)


def load_config(path: Path) -> SearchConfig:
    """Load a configuration file.

    Args:
        path: YAML file to read.

    Returns:
        SearchConfig: Parsed filters. An empty file yields an empty config.

    Raises:
        ConfigError: If the file cannot be read, is not valid YAML, or does
            not have the expected shape.
    """
    try:
        with open(path, encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except yaml.YAMLError as exc:
        raise ConfigError(f"failed to parse configuration file {path}: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"failed to read configuration file {path}: {exc}") from exc

    if data is None:
        return SearchConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"configuration file must contain a YAML mapping: {path}")

    unknown = sorted(set(data) - {EXCLUDE_NAMES_KEY, EXCLUDE_PATHS_KEY})
    if unknown:
        logger.warning("ignoring unknown keys in %s: %s", path, ", ".join(map(str, unknown)))

    return SearchConfig(
        exclude_names=_pattern_list(data, EXCLUDE_NAMES_KEY, path),
        exclude_paths=_pattern_list(data, EXCLUDE_PATHS_KEY, path),
    )


def resolve_config(explicit_path: str | None = None) -> SearchConfig:
    """Load the explicit configuration file, else the default one if present.

    Args:
        explicit_path: Path given on the command line. It must exist.

    Returns:
        SearchConfig: Loaded filters, or an empty config when no file applies.

    Raises:
        ConfigError: If the explicit file is missing or any file is invalid.
    """
    if explicit_path is not None:
        path = Path(explicit_path).expanduser()
        if not path.is_file():
            raise ConfigError(f"configuration file not found: {explicit_path}")
        return load_config(path)

    path = default_config_path()
    if not path.is_file():
        logger.debug("no configuration file at %s", path)
        return SearchConfig()
    logger.debug("loading configuration from %s", path)
    return load_config(path)
