"""Application configuration and segments file helpers.

Configuration is a JSON file overlaid on built-in defaults:
  - The first file found in ``_FILE_PATHS`` is used.
  - Keys missing from the file fall back to ``DEFAULT_CONFIG``.
  - With no file at all, the defaults are used as-is.

The segments file holds the alias table that maps raw Strava segment names
to display names. It is re-read only when its modification time changes.
"""

import copy
import json
import os
from pathlib import Path
from typing import Any

from .errors import ConfigError

# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

DEFAULT_CONFIG: dict[str, Any] = {
    "home_timezone": "UTC",
    "debug": False,
    "segments_file": "segments.json",
    "output": "activities.gpx",
    "activity_filter": {
        "commute_only": False,
        "non_commute_only": False,
        "include": None,
        "exclude": None,
    },
    "metadata": {
        "overridable_keys": [],
    },
    "strava": {
        "client_id": "",
        "client_secret": "",
    },
}

# Candidate JSON config file locations (searched in order)
_FILE_PATHS: list[Path] = [
    Path("stravatrack_config.json"),
    Path("../stravatrack_config.json"),
]


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _read_json(path: Path) -> Any:
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Could not read {path}: {e}", path=str(path)) from e


def _load_from_file() -> dict[str, Any] | None:
    """Try each candidate path; return parsed JSON or ``None``."""
    for path in _FILE_PATHS:
        if path.exists():
            data = _read_json(path)
            if not isinstance(data, dict):
                raise ConfigError(f"{path} must contain a JSON object", path=str(path))
            return data
    return None


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_config() -> dict[str, Any]:
    """Return the configuration: defaults overlaid with the config file, if any.

    Nested sections (``activity_filter``, ``metadata``) are merged key by key
    so a file only needs to list what it changes.
    """
    config = copy.deepcopy(DEFAULT_CONFIG)
    file_cfg = _load_from_file() or {}
    for key, value in file_cfg.items():
        if isinstance(value, dict) and isinstance(config.get(key), dict):
            config[key] = {**config[key], **value}
        else:
            config[key] = value

    if os.environ.get("STRAVATRACK_DEBUG") == "1":
        config["debug"] = True
    return config


class SegmentsFile:
    """The user's segments file: a description, an alias table and free-form data.

    ``read()`` only re-parses the file when its modification time has changed
    since the previous read.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self.last_modified: float | None = None
        self.description = ""
        self.aliases: dict[str, str] = {}
        self.data: dict[str, Any] = {}

    def read(self) -> bool:
        """Load the file if it changed. Returns True when the contents were (re)loaded.

        A missing file leaves an empty alias table.
        """
        try:
            mtime = self.path.stat().st_mtime
        except FileNotFoundError:
            self.last_modified = None
            self.description, self.aliases, self.data = "", {}, {}
            return False

        if self.last_modified is not None and mtime == self.last_modified:
            return False

        content = _read_json(self.path)
        if not isinstance(content, dict):
            raise ConfigError(f"{self.path} must contain a JSON object", path=str(self.path))
        aliases = content.get("alias") or {}
        if not isinstance(aliases, dict) or not all(
            isinstance(k, str) and isinstance(v, str) for k, v in aliases.items()
        ):
            raise ConfigError(f"'alias' in {self.path} must map segment names to names", path=str(self.path))

        self.description = str(content.get("description") or "")
        self.aliases = aliases
        self.data = content.get("data") or {}
        self.last_modified = mtime
        return True
