"""
JSON-based manufacturing configuration for glazing_layout.

Overrides the built-in manufacturing constants (config.py) through a
``.glazing.json`` file. The result is always a new, frozen
``ManufacturingSpec`` that the host passes to engine functions; nothing
here modifies module-level state.

Search order for the config file:
1. Explicit config path
2. .glazing.json in the project directory
3. .glazing.json in the current working directory
4. ~/.glazing.json

Example .glazing.json:
{
    "offsets": {
        "zero_angle_offset": 46.5,
        "positive_angle_factor": 67.89
    },
    "panels": {
        "max_panel_width": 700,
        "free_width_threshold": 400
    },
    "cut_lengths": {
        "cover_wall_bonus": 54
    },
    "fittings": {
        "lock_widths": {"Slutlock hona": 25.0}
    }
}
"""

import json
import logging
from dataclasses import fields, replace
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Union

from glazing_layout.config import (
    DEFAULT_SPEC,
    FittingSpec,
    ManufacturingSpec,
)

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".glazing.json"

SECTIONS = ("offsets", "panels", "cut_lengths", "fittings", "guide")


def _plain(value: Any) -> Any:
    """Convert tuples / read-only mappings into JSON-friendly containers."""
    if isinstance(value, tuple):
        return list(value)
    if isinstance(value, Mapping):
        return dict(value)
    return value


def _override_section(section: Any, overrides: Mapping[str, Any], name: str) -> Any:
    """Return a copy of a frozen section with known keys overridden."""
    known = {f.name: getattr(section, f.name) for f in fields(section)}
    changes: Dict[str, Any] = {}

    for key, value in overrides.items():
        if key.startswith("_"):
            continue
        if key not in known:
            logger.warning("Unknown config key %s.%s ignored", name, key)
            continue
        current = known[key]
        if isinstance(current, tuple):
            value = tuple(float(v) for v in value)
        elif isinstance(section, FittingSpec) and key == "lock_widths":
            merged = dict(current)
            merged.update({str(k): float(v) for k, v in value.items()})
            value = MappingProxyType(merged)
        elif isinstance(current, float):
            value = float(value)
        changes[key] = value

    return replace(section, **changes) if changes else section


def spec_from_dict(
    data: Mapping[str, Any],
    base: ManufacturingSpec = DEFAULT_SPEC,
) -> ManufacturingSpec:
    """Create a spec from a dictionary of per-section overrides.

    Args:
        data: Mapping of section name to field overrides
        base: Spec supplying every value not overridden

    Returns:
        New ManufacturingSpec
    """
    changes = {}
    for name in SECTIONS:
        if name not in data:
            continue
        if not isinstance(data[name], Mapping):
            logger.warning("Config section %s is not an object, ignored", name)
            continue
        changes[name] = _override_section(getattr(base, name), data[name], name)
    return replace(base, **changes) if changes else base


def spec_to_dict(spec: ManufacturingSpec) -> Dict[str, Any]:
    """Convert a spec to a JSON-compatible dictionary."""
    result: Dict[str, Any] = {}
    for name in SECTIONS:
        section = getattr(spec, name)
        result[name] = {f.name: _plain(getattr(section, f.name)) for f in fields(section)}
    return result


def spec_to_json(spec: ManufacturingSpec, indent: int = 2) -> str:
    return json.dumps(spec_to_dict(spec), indent=indent, ensure_ascii=False)


def spec_from_json(json_str: str, base: ManufacturingSpec = DEFAULT_SPEC) -> ManufacturingSpec:
    return spec_from_dict(json.loads(json_str), base)


def save_spec(spec: ManufacturingSpec, path: Union[str, Path]) -> None:
    """Save a spec to a JSON file."""
    path = Path(path)
    with open(path, 'w', encoding='utf-8') as f:
        f.write(spec_to_json(spec))
    logger.info("Configuration saved to %s", path)


def load_spec(path: Union[str, Path], base: ManufacturingSpec = DEFAULT_SPEC) -> ManufacturingSpec:
    """Load a spec from a JSON file.

    Raises:
        FileNotFoundError: If file doesn't exist
        json.JSONDecodeError: If file is not valid JSON
    """
    path = Path(path)
    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)
    logger.info("Configuration loaded from %s", path)
    return spec_from_dict(data, base)


def find_config_file(
    project_dir: Optional[Union[str, Path]] = None,
    explicit_config: Optional[Union[str, Path]] = None,
) -> Optional[Path]:
    """Find the configuration file using the search hierarchy.

    Returns:
        Path to config file if found, None otherwise
    """
    if explicit_config:
        explicit = Path(explicit_config)
        if explicit.exists():
            return explicit
        logger.warning("Explicit config not found: %s", explicit)

    if project_dir:
        project_config = Path(project_dir) / CONFIG_FILENAME
        if project_config.exists():
            return project_config

    cwd_config = Path.cwd() / CONFIG_FILENAME
    if cwd_config.exists():
        return cwd_config

    home_config = Path.home() / CONFIG_FILENAME
    if home_config.exists():
        return home_config

    return None


def load_config(
    project_dir: Optional[Union[str, Path]] = None,
    explicit_config: Optional[Union[str, Path]] = None,
) -> ManufacturingSpec:
    """Load the manufacturing spec, falling back to built-in defaults."""
    config_path = find_config_file(project_dir, explicit_config)

    if config_path:
        try:
            return load_spec(config_path)
        except (json.JSONDecodeError, IOError, TypeError, ValueError, AttributeError) as e:
            logger.error("Failed to load config %s: %s", config_path, e)

    return DEFAULT_SPEC


def create_sample_config(path: Union[str, Path] = CONFIG_FILENAME) -> None:
    """Write a sample configuration file holding every default value."""
    sample: Dict[str, Any] = {
        "_comment": "Glazing layout manufacturing constants (mm, degrees)",
        "_version": "1.0",
    }
    sample.update(spec_to_dict(DEFAULT_SPEC))

    path = Path(path)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(sample, f, indent=2, ensure_ascii=False)

    logger.info("Sample configuration created: %s", path)
