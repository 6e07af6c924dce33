"""Named store registry.

Applications that need several independently configured stores in one
process keep them in an explicit registry owned by their composition root.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any

from core.config import StoreConfig
from core.errors import StowageConfigError
from store.file_data_store import FileDataStore


class StoreRegistry:
    """Map of store name to ``FileDataStore`` instance."""

    def __init__(self) -> None:
        self._stores: dict[str, FileDataStore] = {}

    def create(
        self,
        name: str,
        config: StoreConfig | None = None,
        **overrides: Any,
    ) -> FileDataStore:
        """Create and register a store.

        Args:
            name: Unique store name.
            config: Base configuration; defaults to ``StoreConfig()``.
            **overrides: ``StoreConfig`` fields replacing values from ``config``.

        Returns:
            The registered store.

        Raises:
            StowageConfigError: If the name is taken or an override is unknown.
        """
        if name in self._stores:
            raise StowageConfigError(
                f"Store '{name}' is already registered. Call reset() or pick another name."
            )
        base = config or StoreConfig()
        try:
            resolved = replace(base, **overrides)
        except TypeError as error:
            raise StowageConfigError(f"Invalid store options for '{name}': {error}") from error
        store = FileDataStore(resolved)
        self._stores[name] = store
        return store

    def lookup(self, name: str) -> FileDataStore:
        """Return a registered store.

        Raises:
            StowageConfigError: If no store has that name.
        """
        try:
            return self._stores[name]
        except KeyError as error:
            known = ", ".join(sorted(self._stores)) or "none"
            raise StowageConfigError(
                f"Unknown store '{name}'. Registered stores: {known}."
            ) from error

    def names(self) -> list[str]:
        """Return registered store names in sorted order."""
        return sorted(self._stores)

    def reset(self) -> None:
        """Forget every registered store."""
        self._stores.clear()

    def __contains__(self, name: object) -> bool:
        return name in self._stores

    def __len__(self) -> int:
        return len(self._stores)
