"""Configuration for linelog destinations.

Three-layer config resolution (highest priority wins):
  1. Explicit values — CLI flags or keyword overrides
  2. Environment — LINELOG_LEVEL, LINELOG_FILE, NO_COLOR
  3. Config files — .linelog.json in the working tree, then
     ~/.linelog/config.json

Config file format::

    {
      "console": "INFO",
      "color": true,
      "files": {"logs/app.log": "DEBUG"}
    }

"console": null disables console logging. Relative file paths are
resolved against the directory holding the config file.
"""

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

from .levels import Level, parse_level

PROJECT_CONFIG_NAME = ".linelog.json"


# ---------------------------------------------------------------------------
# Config file locations
# ---------------------------------------------------------------------------
def get_global_config_dir():
    """Return the global config directory (~/.linelog/)."""
    return Path.home() / ".linelog"


def get_global_config_path():
    """Return path to the global config file."""
    return get_global_config_dir() / "config.json"


def find_project_config(start_dir=None):
    """Walk up from start_dir looking for .linelog.json.

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


def load_config_file(path=None, start_dir=None):
    """Load an explicit config file, or the nearest project/global one.

    Returns (data, path); path is None when nothing was found.
    """
    if path is not None:
        return load_json(path), Path(path)
    found = find_project_config(start_dir)
    if found:
        return load_json(found), found
    global_path = get_global_config_path()
    if global_path.is_file():
        return load_json(global_path), global_path
    return {}, None


def parse_file_spec(spec):
    """Parse PATH[:LEVEL] into (path, level).

    The level suffix is only taken when it names a level, so Windows
    drive letters (C:\\logs\\app.log) pass through untouched.
    """
    path, sep, suffix = spec.rpartition(":")
    if sep and path:
        try:
            return path, parse_level(suffix)
        except ValueError:
            pass
    return spec, Level.INFO


# ---------------------------------------------------------------------------
# Config resolution
# ---------------------------------------------------------------------------
@dataclass
class LoggingConfig:
    """Resolved destinations: console threshold (None = off) and files."""
    console: Optional[Level] = Level.INFO
    color: Optional[bool] = None
    files: Dict[Path, Level] = field(default_factory=dict)
    source: Optional[Path] = None


def resolve_config(console=None, color=None, files=None,
                   config_path=None, start_dir=None, environ=None):
    """Resolve logging config using three-layer precedence.

    Args:
        console: Explicit console level (overrides everything)
        color: Explicit color setting for the console
        files: Iterable of PATH[:LEVEL] specs, added to configured files
        config_path: Explicit config file instead of the search
        start_dir: Where the project config search begins
        environ: Mapping used instead of os.environ

    Returns:
        LoggingConfig

    Raises:
        ValueError: if any layer names an unknown level
    """
    env = os.environ if environ is None else environ
    data, source = load_config_file(config_path, start_dir)
    base_dir = source.parent if source else Path(start_dir or os.getcwd())

    config = LoggingConfig(source=source)

    # Layer 3: config file
    if "console" in data:
        config.console = (None if data["console"] is None
                          else parse_level(data["console"]))
    if data.get("color") is not None:
        config.color = bool(data["color"])
    for path, level in (data.get("files") or {}).items():
        target = Path(path)
        if not target.is_absolute():
            target = base_dir / target
        config.files[target] = parse_level(level)

    # Layer 2: environment
    if env.get("LINELOG_LEVEL"):
        config.console = parse_level(env["LINELOG_LEVEL"])
    if env.get("LINELOG_FILE"):
        path, level = parse_file_spec(env["LINELOG_FILE"])
        config.files[Path(path)] = level
    if env.get("NO_COLOR"):
        config.color = False

    # Layer 1: explicit
    if console is not None:
        config.console = parse_level(console)
    if color is not None:
        config.color = color
    for spec in files or ():
        path, level = parse_file_spec(spec)
        config.files[Path(path)] = level

    return config


def apply_config(config, manager=None):
    """Register the workers described by ``config`` with ``manager``.

    Returns the manager used.
    """
    if manager is None:
        from .manager import get_manager
        manager = get_manager()
    if config.console is not None:
        manager.add_worker("", config.console, color=config.color)
    for path, level in config.files.items():
        manager.add_worker(path, level)
    return manager


# ---------------------------------------------------------------------------
# Config writing
# ---------------------------------------------------------------------------
def save_project_config(data, directory=None):
    """Write .linelog.json to ``directory`` (default: working directory)."""
    target = Path(directory or os.getcwd()) / PROJECT_CONFIG_NAME
    with open(target, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
        f.write("\n")
    return target
