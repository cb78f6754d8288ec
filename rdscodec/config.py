"""Configuration file management for rds-codec.

Reads/writes ~/.rds-codec/config.yaml with station defaults used by
`rds encode` when an option is not given, and the default output format
of `rds decode`.
"""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".rds-codec"
CONFIG_FILE = CONFIG_DIR / "config.yaml"


def _parse_value(val: str):
    """Parse a YAML-like value string into a Python type."""
    if val == "null" or val == "~" or val == "":
        return None
    if val.lower() == "true":
        return True
    if val.lower() == "false":
        return False
    try:
        return int(val)
    except ValueError:
        pass
    try:
        return float(val)
    except ValueError:
        pass
    # Strip quotes
    if (val.startswith('"') and val.endswith('"')) or \
       (val.startswith("'") and val.endswith("'")):
        return val[1:-1]
    return val


def _default_config() -> dict:
    return {
        "station": {
            "program_identifier": None,
            "program_type": 0,
            "traffic_program": False,
        },
        "program_service": {
            "traffic_announcement": False,
            "music": True,
            "alternative_frequencies": None,
        },
        "radio_text": {
            "ab_flag": False,
        },
        "output": {
            "format": "text",
        },
    }


def load_config() -> dict:
    """Load config from ~/.rds-codec/config.yaml.

    Returns default config if the file doesn't exist or can't be parsed.
    Uses simple key: value parsing to avoid a PyYAML dependency.
    """
    config = _default_config()
    if not CONFIG_FILE.exists():
        return config

    try:
        text = CONFIG_FILE.read_text()
    except OSError as e:
        logger.warning("Could not read %s, using defaults: %s", CONFIG_FILE, e)
        return config

    current_section = None
    for lineno, line in enumerate(text.splitlines(), start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue

        if ":" not in stripped:
            logger.warning("%s:%d: ignoring line without ':'", CONFIG_FILE, lineno)
            continue

        key, _, val = stripped.partition(":")
        key = key.strip()
        val = val.strip()

        # Indented line = belongs to current section
        is_indented = line.startswith("  ") or line.startswith("\t")

        if not is_indented:
            if not val:
                # Section header (e.g., "station:")
                current_section = key
                if not isinstance(config.get(current_section), dict):
                    config[current_section] = {}
            else:
                # Top-level key with value
                current_section = None
                config[key] = _parse_value(val)
            continue

        if current_section and isinstance(config.get(current_section), dict):
            config[current_section][key] = _parse_value(val)
        else:
            config[key] = _parse_value(val)

    return config


def save_config(config: dict) -> Path:
    """Save config to ~/.rds-codec/config.yaml.

    Returns the path to the config file.
    """
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)

    lines = ["# rds-codec configuration", ""]

    for section, values in config.items():
        if isinstance(values, dict):
            lines.append(f"{section}:")
            for key, val in values.items():
                lines.append(f"  {key}: {_format_value(val)}")
            lines.append("")
        else:
            lines.append(f"{section}: {_format_value(values)}")

    CONFIG_FILE.write_text("\n".join(lines) + "\n")
    return CONFIG_FILE


def _format_value(val) -> str:
    if val is None:
        return "null"
    if isinstance(val, bool):
        return "true" if val else "false"
    if isinstance(val, str):
        return f"\"{val}\""
    return str(val)


def set_value(config: dict, dotted_key: str, raw: str) -> dict:
    """Set `section.key` (or a top-level `key`) from a command-line string."""
    value = _parse_value(raw)
    section, _, key = dotted_key.partition(".")
    if not key:
        config[section] = value
        return config
    if not isinstance(config.get(section), dict):
        config[section] = {}
    config[section][key] = value
    return config
