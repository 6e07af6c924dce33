"""Runtime configuration model for Stowage.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path

from core.constants import (
    DEFAULT_ROOT_PATH,
    FETCH_SECRET_ENV,
    ROOT_PATH_ENV,
    SERVER_ROOT_ENV,
    STORE_META_ENV,
)
from core.errors import StowageConfigError

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


@dataclass(frozen=True)
class StoreConfig:
    """Validated file data store configuration.

    Attributes:
        root_path: Directory under which all content is stored.
        server_root: Directory a web server exposes as its URL root.
        store_meta: Whether metadata sidecars are written.
        fetch_secret: Optional secret used to sign fetch URLs.
    """

    root_path: Path = DEFAULT_ROOT_PATH
    server_root: Path | None = None
    store_meta: bool = True
    fetch_secret: str | None = None

    @classmethod
    def from_env(cls) -> "StoreConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            StowageConfigError: If environment values are invalid.
        """
        root_path_value = os.getenv(ROOT_PATH_ENV, str(DEFAULT_ROOT_PATH))
        server_root_value = os.getenv(SERVER_ROOT_ENV)
        store_meta_value = os.getenv(STORE_META_ENV, "true")
        return cls(
            root_path=Path(root_path_value).expanduser(),
            server_root=Path(server_root_value).expanduser() if server_root_value else None,
            store_meta=_parse_flag(STORE_META_ENV, store_meta_value),
            fetch_secret=os.getenv(FETCH_SECRET_ENV) or None,
        )


def _parse_flag(env_name: str, raw_value: str) -> bool:
    """Parse a boolean environment value.

    Args:
        env_name: Variable name, used in the error message.
        raw_value: Raw string from environment.

    Returns:
        Parsed flag.

    Raises:
        StowageConfigError: If value is not a recognised boolean word.
    """
    normalized = raw_value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise StowageConfigError(
        f"Invalid {env_name} value: "
        f"expected one of {', '.join(_TRUE_VALUES + _FALSE_VALUES)}, got '{raw_value}'. "
        f"Set {env_name} to a boolean value."
    )
