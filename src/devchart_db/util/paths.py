# src/devchart_db/util/paths.py
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_cache_dir, user_config_dir

APP_NAME = "devchart-db"

OPTIONS_FILENAME = "options"


@dataclass(frozen=True)
class CacheRoot:
    """
    Cache location for devchart-db.

    Passed explicitly to the cache store; nothing in the package keeps a
    process-wide cache directory. Layout:
        <root>/mdc/options
        <root>/mdc/<slug>-<fingerprint>
    """

    root: Path
    source: str = "explicit"

    @property
    def mdc_dir(self) -> Path:
        return self.root / "mdc"

    @property
    def options_path(self) -> Path:
        return self.mdc_dir / OPTIONS_FILENAME

    def entries_path(self, key: str) -> Path:
        return self.mdc_dir / key


def get_cache_root(cache_dir: Path | str | None = None) -> CacheRoot:
    """
    Return the active cache root.

    - An explicit cache_dir wins.
    - Else DEVCHART_DB_CACHE_DIR, if set.
    - Else a platform-appropriate per-user cache directory (via platformdirs).
    """
    if cache_dir is not None:
        return CacheRoot(root=Path(cache_dir).expanduser().resolve(), source="explicit")

    env = os.environ.get("DEVCHART_DB_CACHE_DIR")
    if env:
        return CacheRoot(root=Path(env).expanduser().resolve(), source="env")

    return CacheRoot(root=Path(user_cache_dir(appname=APP_NAME, appauthor=False)).resolve(), source="user")


def get_config_dir() -> Path:
    """DEVCHART_DB_CONFIG_DIR, or the per-user config directory."""
    env = os.environ.get("DEVCHART_DB_CONFIG_DIR")
    if env:
        return Path(env).expanduser().resolve()
    return Path(user_config_dir(appname=APP_NAME, appauthor=False)).resolve()
