"""Configuration management for muxlog.

Three-layer config resolution (highest priority wins):
  1. CLI flags — explicit on the command line
  2. Project config — .muxlog.json in the working directory or a parent
  3. Global config — ~/.muxlog/config.json (or --config PATH)

A config file declares the levels to define and the sinks to attach:

    {
      "levels": ["info", "error", "security"],
      "sinks": [
        {"id": "console", "levels": null},
        "events:info,error:stdout::json",
        {"id": "audit", "levels": ["security"],
         "destination": "file", "location": "audit.log", "format": "json"}
      ]
    }

CLI --level and --sink flags are added on top of whatever the winning
config layer declares.
"""

import json
import os
from pathlib import Path

from muxlog.levels import DEFAULT_LEVELS
from muxlog.sinkspec import SinkConfig, parse_levels, parse_sink_spec


PROJECT_CONFIG_NAME = ".muxlog.json"


# ---------------------------------------------------------------------------
# Config file locations
# ---------------------------------------------------------------------------
def get_global_config_dir():
    """Return the global config directory (~/.muxlog/)."""
    return Path.home() / ".muxlog"


def get_global_config_path():
    """Return path to the global config file."""
    return get_global_config_dir() / "config.json"


def find_project_config(start_dir=None):
    """Walk up from start_dir looking for .muxlog.json.

    Returns the path if found, None otherwise.
    """
    current = Path(start_dir or os.getcwd()).resolve()
    for _ in range(20):  # safety limit
        candidate = current / PROJECT_CONFIG_NAME
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


# ---------------------------------------------------------------------------
# Config loading
# ---------------------------------------------------------------------------
def load_json(path):
    """Load a JSON file, returning empty dict on error."""
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (FileNotFoundError, IsADirectoryError, json.JSONDecodeError):
        return {}
    return data if isinstance(data, dict) else {}


def load_global_config(path=None):
    """Load the global config file (or an explicit --config file)."""
    return load_json(path or get_global_config_path())


def load_project_config(start_dir=None):
    """Load the nearest .muxlog.json walking upward from start_dir."""
    path = find_project_config(start_dir)
    if path:
        return load_json(path), path
    return {}, None


# ---------------------------------------------------------------------------
# Config resolution
# ---------------------------------------------------------------------------
def _first_present(key, *layers):
    for layer in layers:
        if layer.get(key) is not None:
            return layer[key]
    return None


def resolve_config(args, start_dir=None):
    """Resolve levels and sinks using three-layer precedence.

    ``levels`` and ``sinks`` are each taken from the project config if it
    sets them, otherwise from the global config. CLI values from
    ``args.level`` and ``args.sink`` are then appended.

    Config-file sink entries may be mappings or sink spec strings, and
    ``levels`` may be a list or a comma-separated string.

    Returns:
        dict with 'levels' (list of names) and 'sinks' (list of SinkConfig)

    Raises:
        ValueError: If a levels value, sink entry or --sink spec is malformed
    """
    project_cfg, _ = load_project_config(start_dir)
    global_cfg = load_global_config(getattr(args, "config", None))

    levels = parse_levels(_first_present("levels", project_cfg, global_cfg))
    levels = list(DEFAULT_LEVELS if levels is None else levels)
    for name in getattr(args, "level", None) or []:
        if name not in levels:
            levels.append(name)

    entries = _first_present("sinks", project_cfg, global_cfg) or []
    if not isinstance(entries, list):
        raise ValueError(f"Config 'sinks' must be a list: {entries!r}")
    sinks = [SinkConfig.from_entry(entry) for entry in entries]
    sinks.extend(parse_sink_spec(spec)
                 for spec in getattr(args, "sink", None) or [])

    return {"levels": levels, "sinks": sinks}


# ---------------------------------------------------------------------------
# Config writing
# ---------------------------------------------------------------------------
def save_project_config(data, project_dir=None):
    """Write .muxlog.json to the project directory."""
    target = Path(project_dir or os.getcwd()) / PROJECT_CONFIG_NAME
    with open(target, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
        f.write("\n")
    return target


def save_global_config(data):
    """Write the global config file."""
    config_dir = get_global_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)
    config_path = get_global_config_path()
    with open(config_path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
        f.write("\n")
    return config_path
