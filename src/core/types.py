"""Shared typed models.

This module defines the content and option models passed between
the SDK, the file data store and the serving layer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from core.constants import META_NAME_KEY


@dataclass
class Content:
    """Opaque payload handed to or loaded from a data store.

    Attributes:
        data: Raw byte payload. The store never mutates it.
        meta: Mutable key/value metadata.
        name: Optional logical file name.
    """

    data: bytes = b""
    meta: dict[str, Any] = field(default_factory=dict)
    name: str | None = None

    def update(self, data: bytes, meta: Mapping[str, Any] | None = None) -> "Content":
        """Replace payload and metadata, e.g. with a store read result."""
        self.data = data
        if meta is not None:
            self.meta = dict(meta)
            stored_name = self.meta.get(META_NAME_KEY)
            if isinstance(stored_name, str):
                self.name = stored_name
        return self


@dataclass(frozen=True)
class WriteOptions:
    """Per-write options.

    Attributes:
        path: Explicit relative storage path; date-derived when omitted.
    """

    path: str | None = None
