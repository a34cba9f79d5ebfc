"""Configuration loading for order-import.

Options are read from ``[tool.order-import]`` in ``pyproject.toml`` or from an
``[order-import]`` section in ``setup.cfg``. Command-line flags are applied on
top with :func:`merge_overrides`.
"""

import configparser
import logging
from dataclasses import replace
from pathlib import Path
from typing import Any
from typing import Dict
from typing import Optional

import tomllib

from order_import.models import OrganizerConfig

LOG = logging.getLogger(__name__)

SECTION = "order-import"

# config file key -> OrganizerConfig field
KEYS = {
    "format-style": "format_style",
    "optimize-barrel-imports": "optimize_barrel_imports",
    "group-by-source-class": "group_by_source_class",
    "remove-unused": "remove_unused",
    "path-aliases": "path_alias_prefixes",
    "barrel-targets": "barrel_optimization_targets",
    "pinned-marker": "pinned_module_marker",
}
BOOLEAN_FIELDS = {"optimize_barrel_imports", "group_by_source_class", "remove_unused"}
LIST_FIELDS = {"path_alias_prefixes", "barrel_optimization_targets"}


def _read_pyproject(path: Path) -> Optional[Dict[str, Any]]:
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        LOG.warning("Ignoring invalid %s: %s", path, e)
        return None
    return data.get("tool", {}).get(SECTION)


def _parse_cfg_value(field_name: str, raw: str) -> Any:
    if field_name in BOOLEAN_FIELDS:
        lowered = raw.strip().lower()
        if lowered in ("1", "true", "yes", "on"):
            return True
        if lowered in ("0", "false", "no", "off"):
            return False
        raise ValueError(f"Invalid boolean for {field_name}: {raw!r}")
    if field_name in LIST_FIELDS:
        return [item.strip() for item in raw.replace("\n", ",").split(",") if item.strip()]
    return raw.strip()


def _read_setup_cfg(path: Path) -> Optional[Dict[str, Any]]:
    parser = configparser.ConfigParser()
    parser.read(path, encoding="utf-8")
    if not parser.has_section(SECTION):
        return None
    options: Dict[str, Any] = {}
    for key, raw in parser.items(SECTION):
        field_name = KEYS.get(key)
        options[key] = _parse_cfg_value(field_name, raw) if field_name else raw
    return options


def config_from_mapping(options: Dict[str, Any]) -> OrganizerConfig:
    """Build an OrganizerConfig from config-file keys.

    Raises:
        ValueError: If a value is invalid, e.g. an unknown format style.
    """
    kwargs: Dict[str, Any] = {}
    for key, value in options.items():
        field_name = KEYS.get(key)
        if field_name is None:
            LOG.debug("Unknown configuration key %r ignored", key)
            continue
        kwargs[field_name] = _check_value(key, field_name, value)
    return OrganizerConfig(**kwargs)


def _check_value(key: str, field_name: str, value: Any) -> Any:
    if field_name in BOOLEAN_FIELDS:
        if not isinstance(value, bool):
            raise ValueError(f"{key} must be true or false, got {value!r}")
    elif field_name in LIST_FIELDS:
        if not isinstance(value, (list, tuple)) or not all(isinstance(item, str) for item in value):
            raise ValueError(f"{key} must be a list of strings, got {value!r}")
    elif not isinstance(value, str):
        raise ValueError(f"{key} must be a string, got {value!r}")
    return value


def load_config(root: str) -> OrganizerConfig:
    """Load organizer options for a project root, or return the defaults."""
    root_path = Path(root)

    toml_path = root_path / "pyproject.toml"
    if toml_path.exists():
        options = _read_pyproject(toml_path)
        if options is not None:
            LOG.debug("Using configuration from %s", toml_path)
            return config_from_mapping(options)

    cfg_path = root_path / "setup.cfg"
    if cfg_path.exists():
        options = _read_setup_cfg(cfg_path)
        if options is not None:
            LOG.debug("Using configuration from %s", cfg_path)
            return config_from_mapping(options)

    return OrganizerConfig()


def find_config_root(start: str) -> Path:
    """Return the nearest directory at or above start holding pyproject.toml or setup.cfg.

    Falls back to start when no parent has either file.
    """
    start_path = Path(start).resolve()
    for directory in (start_path, *start_path.parents):
        if (directory / "pyproject.toml").exists() or (directory / "setup.cfg").exists():
            return directory
    return start_path


def merge_overrides(config: OrganizerConfig, **overrides: Any) -> OrganizerConfig:
    """Return config with every override that is not None applied."""
    changes = {name: value for name, value in overrides.items() if value is not None}
    return replace(config, **changes) if changes else config
