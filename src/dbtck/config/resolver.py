"""Layered resolution of harness settings.

Settings come from the process environment, overridden by the contents of
``test.properties`` in the start directory and in every ancestor directory,
plus ``dbtck/test.properties`` at each of those levels. This lets the same
test suite run from any sub-directory of a source tree and still pick up the
right backend.

Precedence, lowest first:

1. Environment variables
2. Files in walk order. The walk starts at the start directory and moves up
   to the filesystem root, so a file in an ancestor directory overrides a file
   in a deeper one. At a single level, ``dbtck/test.properties`` overrides
   ``test.properties``.
"""

import os
import threading
from collections.abc import Iterator, Mapping
from enum import Enum
from pathlib import Path
from typing import Optional, Union

from dbtck.config.properties import load_properties
from dbtck.core.logging import get_logger

logger = get_logger(__name__)

CONFIG_FILE_NAME = "test.properties"
CONFIG_SUBDIR = "dbtck"


class Property(Enum):
    """Settings keys that mean something to the harness."""

    #: Tester to instantiate: a registry name such as "sqlite" or an import
    #: path such as "mydriver.testing:MyTester".
    HELPER_CLASS_NAME = "DBTCK_HELPER_CLASS_NAME"
    #: URL returned by ``Tester.get_url``.
    CONNECT_URL = "DBTCK_CONNECT_URL"
    #: SQL script that seeds catalog-backed testers.
    CATALOG_URL = "DBTCK_CATALOG_URL"
    REMOTE_URL = "DBTCK_REMOTE_URL"
    REMOTE_USERNAME = "DBTCK_REMOTE_USERNAME"
    REMOTE_PASSWORD = "DBTCK_REMOTE_PASSWORD"
    #: Wrapper placed around connections; see ``dbtck.testers.Wrapper``.
    WRAPPER = "DBTCK_WRAPPER"
    POOL_SIZE = "DBTCK_POOL_SIZE"
    POOL_MAX_OVERFLOW = "DBTCK_POOL_MAX_OVERFLOW"
    POOL_TIMEOUT = "DBTCK_POOL_TIMEOUT"
    POOL_RECYCLE = "DBTCK_POOL_RECYCLE"
    POOL_PRE_PING = "DBTCK_POOL_PRE_PING"

    @property
    def path(self) -> str:
        """Full name of the setting."""
        return self.value


Key = Union[str, Property]


class Settings(Mapping[str, str]):
    """Immutable string-to-string settings map with provenance.

    Lookups accept either the key string or a ``Property``.
    """

    def __init__(
        self,
        values: Optional[Mapping[str, str]] = None,
        sources: tuple[str, ...] = (),
    ):
        self._values: dict[str, str] = dict(values or {})
        self._sources = tuple(sources)

    @property
    def sources(self) -> tuple[str, ...]:
        """Layers merged into this map, lowest precedence first."""
        return self._sources

    def __getitem__(self, key: Key) -> str:
        if isinstance(key, Property):
            key = key.path
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"Settings({len(self)} keys, sources={list(self._sources)})"

    def with_overrides(
        self, overrides: Mapping[Key, str], source: str = "overrides"
    ) -> "Settings":
        """Return a copy with ``overrides`` layered on top.

        Args:
            overrides: Values to set; keys may be strings or Property members
            source: Provenance label for the new layer

        Returns:
            New Settings; this instance is unchanged
        """
        values = dict(self._values)
        for key, value in overrides.items():
            values[key.path if isinstance(key, Property) else key] = value
        return Settings(values, self._sources + (source,))


def candidate_files(start_dir: Path) -> Iterator[Path]:
    """Yield config file locations in merge order."""
    for directory in (start_dir, *start_dir.parents):
        yield directory / CONFIG_FILE_NAME
        yield directory / CONFIG_SUBDIR / CONFIG_FILE_NAME


def resolve_settings(
    start_dir: Optional[Union[str, Path]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Settings:
    """Resolve settings from the environment and discovered files.

    Args:
        start_dir: Directory to start the upward walk from (default: cwd)
        environ: Environment to seed from (default: ``os.environ``)

    Returns:
        Fresh Settings instance
    """
    start = Path(start_dir) if start_dir is not None else Path.cwd()
    start = start.expanduser().resolve()
    values = dict(os.environ if environ is None else environ)
    sources = ["environment"]

    for path in candidate_files(start):
        if not path.is_file():
            continue
        try:
            entries = load_properties(path)
        except (OSError, UnicodeDecodeError) as e:
            logger.debug(f"Skipping unreadable settings file {path}: {e}")
            continue
        logger.debug(f"Loaded {len(entries)} settings from {path}")
        values.update(entries)
        sources.append(str(path))

    return Settings(values, tuple(sources))


# Global settings instance
_settings: Optional[Settings] = None
_settings_lock = threading.Lock()


def get_settings() -> Settings:
    """Get the process-wide settings, resolving them on first use."""
    global _settings
    if _settings is None:
        with _settings_lock:
            if _settings is None:
                _settings = resolve_settings()
    return _settings


def reset_settings() -> None:
    """Forget the cached settings (mainly for testing)."""
    global _settings
    with _settings_lock:
        _settings = None
