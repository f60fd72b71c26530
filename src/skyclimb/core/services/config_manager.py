"""
config_manager.py
-----------------
Loads simulation override files.

Features:
- .json files, and .py files exposing a DEFAULT_CONFIG dict
- Bare names ("easy") are looked up in the working directory, ./config and
  $SKYCLIMB_CONFIG_DIR, with or without extension
- Overrides are deep-merged onto defaults; '_notes' keys are comments
"""

import importlib.util
import json
import os
from pathlib import Path

from skyclimb.core.debug.debug_logger import DebugLogger


# ===========================================================
# Search Path
# ===========================================================

CONFIG_DIR_ENV = "SKYCLIMB_CONFIG_DIR"

SEARCH_DIRS = [".", "config"]

NOTES_KEY = "_notes"


def search_dirs():
    """SEARCH_DIRS plus the directory named by $SKYCLIMB_CONFIG_DIR, if set."""
    extra = os.environ.get(CONFIG_DIR_ENV)
    return [*SEARCH_DIRS, extra] if extra else list(SEARCH_DIRS)


def resolve_path(filename):
    """
    Locate a config file.

    Explicit or existing paths are returned unchanged. Otherwise each search
    directory is tried with the name as given, then with each known suffix.
    Unresolvable names come back unchanged so the loader reports them.
    """
    given = Path(filename)
    if given.is_absolute() or given.exists():
        return str(given)

    candidates = [given.name] + [given.name + suffix for suffix in LOADERS]
    for directory in search_dirs():
        for name in candidates:
            path = Path(directory) / given.parent / name
            if path.is_file():
                return str(path)
    return str(filename)


# ===========================================================
# Loaders
# ===========================================================

def _load_json(path):
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def _load_py_module(path):
    """Execute a Python config file and return its DEFAULT_CONFIG."""
    spec = importlib.util.spec_from_file_location(f"skyclimb_config_{Path(path).stem}", path)
    if spec is None or spec.loader is None:
        raise ValueError(f"not an importable Python file: {path}")
    module = importlib.util.module_from_spec(spec)
    try:
        spec.loader.exec_module(module)
    except (ImportError, SyntaxError, NameError) as e:
        raise ValueError(f"error executing {path}: {e}") from e
    return getattr(module, "DEFAULT_CONFIG", {})


LOADERS = {
    ".json": _load_json,
    ".py": _load_py_module,
}


# ===========================================================
# Public API
# ===========================================================

def load_config(filename, default_dict=None, strict=False):
    """
    Read an override file and merge it onto default_dict.

    Args:
        filename: Path or bare name of a .json / .py file
        default_dict: Values used for anything the file does not set
        strict: Raise FileNotFoundError instead of returning the defaults
            when the file is missing, unreadable or not an object

    Returns:
        dict: Merged configuration
    """
    defaults = default_dict or {}
    path = resolve_path(filename)
    loader = LOADERS.get(Path(path).suffix, _load_json)

    try:
        data = loader(path)
        if not isinstance(data, dict):
            raise ValueError(f"top-level value must be an object, got {type(data).__name__}")
    except (ValueError, OSError) as e:
        if strict:
            raise FileNotFoundError(f"Config not loadable: {filename} ({e})") from e
        DebugLogger.warn(f"Ignoring {path}: {e}", category="loading")
        return dict(defaults)

    DebugLogger.system(f"Loaded overrides from {path}", category="loading")
    return merge_dicts(defaults, data)


def merge_dicts(default, override):
    """Deep-merge override onto a copy of default, dropping '_notes' keys."""
    merged = dict(default)
    for key, value in override.items():
        if key == NOTES_KEY:
            continue
        current = merged.get(key)
        if isinstance(value, dict) and isinstance(current, dict):
            merged[key] = merge_dicts(current, value)
        else:
            merged[key] = value
    return merged
