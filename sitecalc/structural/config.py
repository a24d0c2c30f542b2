"""
Estimator Defaults
Loads default rates, covers and bar sizes from rules/estimator_defaults.yaml.
"""

import copy
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .. import RULES_DIR

logger = logging.getLogger(__name__)

DEFAULTS_FILE = RULES_DIR / "estimator_defaults.yaml"

# Used when the rules file is missing or unreadable
DEFAULTS: Dict[str, Any] = {
    'rates': {
        'concrete_rate': 8000,
        'steel_rate': 65,
        'concrete_labor_rate': 1500,
        'steel_labor_rate': 15,
    },
    'nominal_diameters': [8, 10, 12, 16, 20, 25, 32],
    'cover_mm': {
        'beam': 25,
        'column': 40,
        'slab': 20,
    },
    'steel_percent': {
        'default': 1.0,
    },
    'quick': {
        'quantity': 1,
        'number_of_bars': 4,
        'bar_diameter_mm': 20,
    },
    'project': {
        'sample_member': {
            'name': 'Column C1',
            'length': 0.3,
            'width': 0.3,
            'depth': 3.0,
            'quantity': 4,
            'number_of_bars': 4,
            'bar_diameter_mm': 20,
        },
        'new_member': {
            'length': 0,
            'width': 0,
            'depth': 0,
            'quantity': 1,
            'number_of_bars': 4,
            'bar_diameter_mm': 20,
        },
    },
}


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Recursively merge override into a copy of base.

    Empty entries keep the base value. A non-mapping over a mapping section
    is ignored with a warning.
    """
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if value is None:
            continue
        if isinstance(merged.get(key), dict):
            if not isinstance(value, dict):
                logger.warning(f"Ignoring '{key}' in rules file: expected a mapping, got {value!r}")
                continue
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_yaml(path: Path) -> Dict[str, Any]:
    """Read a YAML mapping. Empty files read as {}."""
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping at top level")
    return data


def load_defaults(path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load estimator defaults.

    Values in the rules file override the built-in DEFAULTS key by key,
    so a partial file only needs the entries it changes.

    Args:
        path: Rules file (default: rules/estimator_defaults.yaml)

    Returns:
        Merged configuration dictionary
    """
    path = Path(path) if path else DEFAULTS_FILE
    try:
        overrides = load_yaml(path)
    except (OSError, yaml.YAMLError, ValueError) as e:
        logger.warning(f"Could not load {path}, using built-in defaults: {e}")
        return copy.deepcopy(DEFAULTS)

    return _merge(DEFAULTS, overrides)


def default_steel_percent(config: Dict[str, Any]) -> float:
    """Steel percentage used by the percentage method when none is given."""
    return float(config['steel_percent']['default'])
