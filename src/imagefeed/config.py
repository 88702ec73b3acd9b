"""Configuration management with XDG paths, atomic writes, and env overrides.

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.imagefeed/`` on macOS and Windows.  See :func:`get_config_dir` and
  :func:`get_cache_dir`.
* **Config file** -- a single :class:`~imagefeed.models.FeedConfig` JSON
  file, read by :func:`load_config` and written by :func:`save_config`.
* **Environment overrides** -- ``IMAGEFEED_FEED_URL`` and
  ``IMAGEFEED_STORE_PATH`` take precedence over the file.

All file writes go through :func:`atomic_write` (temp file, then rename), the
same strategy the JSON feed store uses for its snapshot.
"""

from __future__ import annotations

import json
import os
import platform
import tempfile
from pathlib import Path
from typing import Optional

from imagefeed.exceptions import ConfigError
from imagefeed.models import FeedConfig

_APP_NAME = "imagefeed"
_CONFIG_FILENAME = "config.json"
_STORE_FILENAME = "feed-store.json"

ENV_FEED_URL = "IMAGEFEED_FEED_URL"
ENV_STORE_PATH = "IMAGEFEED_STORE_PATH"


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG Base Directory spec (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def _fallback_base_dir() -> Path:
    """Fallback base directory for non-XDG platforms (macOS, Windows)."""
    return Path.home() / f".{_APP_NAME}"


def _xdg_base(env_var: str, default_segments: tuple[str, ...]) -> Path:
    """Resolve an XDG base directory from an env var with fallback segments under $HOME."""
    env_value = os.environ.get(env_var, "")
    if env_value:
        return Path(env_value)
    base = Path.home()
    for seg in default_segments:
        base = base / seg
    return base


def get_config_dir() -> Path:
    """Return the configuration directory, creating it if necessary.

    On Linux/BSD: ``$XDG_CONFIG_HOME/imagefeed/`` (default ``~/.config/imagefeed/``).
    On macOS/Windows: ``~/.imagefeed/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_CONFIG_HOME", (".config",)) / _APP_NAME
    else:
        path = _fallback_base_dir()
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_cache_dir() -> Path:
    """Return the cache directory holding the feed snapshot, creating it if necessary.

    On Linux/BSD: ``$XDG_CACHE_HOME/imagefeed/`` (default ``~/.cache/imagefeed/``).
    On macOS/Windows: ``~/.imagefeed/cache/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_CACHE_HOME", (".cache",)) / _APP_NAME
    else:
        path = _fallback_base_dir() / "cache"
    path.mkdir(parents=True, exist_ok=True)
    return path


def resolve_store_path(config: FeedConfig) -> Path:
    """Return the snapshot file path: the configured one, or the default in the cache dir."""
    if config.cache.store_path:
        return Path(config.cache.store_path).expanduser()
    return get_cache_dir() / _STORE_FILENAME


# --- Atomic writes ---


def atomic_write(path: Path, data: str) -> None:
    """Write data to file atomically using temp file + rename.

    The temporary file is created in the same directory as *path* so that
    ``os.replace`` is an atomic rename on POSIX systems.  The directory is
    not created; a missing directory raises :class:`OSError`.  On any
    failure the temp file is removed and *path* is left untouched.
    """
    fd = None
    tmp_path: Optional[str] = None
    try:
        fd = tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        )
        tmp_path = fd.name
        fd.write(data)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None  # prevent double-close below
        os.replace(tmp_path, path)
    except BaseException:
        if fd is not None:
            fd.close()
        if tmp_path is not None and os.path.lexists(tmp_path):
            os.unlink(tmp_path)
        raise


# --- Config file ---


def _config_path() -> Path:
    return get_config_dir() / _CONFIG_FILENAME


def load_config(path: Optional[Path] = None) -> FeedConfig:
    """Load the configuration file and apply environment overrides.

    Args:
        path: Config file to read.  Defaults to ``config.json`` in
            :func:`get_config_dir`.

    Returns:
        The effective :class:`~imagefeed.models.FeedConfig`.  A missing
        file yields the defaults (plus any overrides).

    Raises:
        ConfigError: If the file exists but contains invalid JSON or fails
            Pydantic validation.
    """
    path = path or _config_path()
    data: dict = {}
    if path.is_file():
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as exc:
            raise ConfigError(f"Invalid config at {path}: {exc}") from exc
        if not isinstance(data, dict):
            raise ConfigError(f"Invalid config at {path}: expected a JSON object")

    feed_url = os.environ.get(ENV_FEED_URL)
    if feed_url:
        data["feed_url"] = feed_url
    store_path = os.environ.get(ENV_STORE_PATH)
    if store_path:
        data.setdefault("cache", {})
        data["cache"]["store_path"] = store_path

    try:
        return FeedConfig.model_validate(data)
    except ValueError as exc:
        raise ConfigError(f"Invalid config at {path}: {exc}") from exc


def save_config(config: FeedConfig, path: Optional[Path] = None) -> None:
    """Persist the configuration atomically to disk.

    Args:
        config: The configuration to save.
        path: Destination file.  Defaults to ``config.json`` in
            :func:`get_config_dir`.
    """
    path = path or _config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    data = config.model_dump(mode="json")
    atomic_write(path, json.dumps(data, indent=2) + "\n")
