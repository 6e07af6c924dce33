"""Filesystem-backed data store.

This module stores content payloads under a root directory, keeps
optional YAML metadata sidecars, and maps relative UIDs back to files
and public URLs.
"""

from __future__ import annotations

from datetime import datetime
import os
from pathlib import Path
from typing import Any, Callable
from uuid import uuid4

from core.config import StoreConfig
from core.constants import META_NAME_KEY
from core.errors import BadUID
from core.logging_config import get_logger
from core.types import Content, WriteOptions
from store.collision import disambiguate, resolve_free_path
from store.meta_sidecar import delete_meta, read_meta, write_meta
from store.path_naming import WriteCounter, derive_path
from store.url_resolver import public_url

_LOGGER = get_logger(__name__)


class FileDataStore:
    """Content store rooted at a local directory.

    UIDs returned by ``write`` are paths relative to ``root_path``.
    Only the literal ``../`` sequence is rejected in UIDs; ``..`` inside
    a file name such as ``jelly_beans..good`` is a valid UID. Symlinks
    and other escapes are not normalized.
    """

    def __init__(
        self,
        config: StoreConfig | None = None,
        *,
        root_path: str | Path | None = None,
        server_root: str | Path | None = None,
        store_meta: bool | None = None,
        clock: Callable[[], datetime] | None = None,
        counter: WriteCounter | None = None,
    ) -> None:
        """Initialize the store from config plus keyword overrides.

        Args:
            config: Base configuration; defaults to ``StoreConfig()``.
            root_path: Override for the storage root.
            server_root: Override for the web server root.
            store_meta: Override for sidecar writing.
            clock: Source of the current time for path derivation.
            counter: Same-second write sequence state.
        """
        base = config or StoreConfig()
        self._root_path = Path(root_path if root_path is not None else base.root_path)
        self._server_root = _optional_path(
            server_root if server_root is not None else base.server_root
        )
        self._store_meta = base.store_meta if store_meta is None else store_meta
        self._clock = clock or datetime.now
        self._counter = counter or WriteCounter()

    @property
    def root_path(self) -> Path:
        return self._root_path

    @root_path.setter
    def root_path(self, value: str | Path) -> None:
        self._root_path = Path(value)

    @property
    def server_root(self) -> Path | None:
        return self._server_root

    @server_root.setter
    def server_root(self, value: str | Path | None) -> None:
        self._server_root = _optional_path(value)

    @property
    def store_meta(self) -> bool:
        return self._store_meta

    @store_meta.setter
    def store_meta(self, value: bool) -> None:
        self._store_meta = value

    def write(self, content: Content, options: WriteOptions | None = None) -> str:
        """Persist content and return its UID.

        Args:
            content: Payload, metadata and optional name.
            options: Optional explicit relative path.

        Returns:
            Path of the stored file relative to ``root_path``.
        """
        options = options or WriteOptions()
        candidate = derive_path(content.name, options.path, self._clock(), self._counter)
        requested_path = self._absolute(candidate)
        content_path = resolve_free_path(requested_path, self.disambiguate)
        if content_path != requested_path:
            _LOGGER.info("content_collision", candidate=candidate)
        target = Path(content_path)
        target.parent.mkdir(parents=True, exist_ok=True)
        _write_bytes(target, content.data)
        meta_written = self._store_meta and bool(content.meta)
        if meta_written:
            write_meta(target, content.meta)
        uid = self._relative(content_path)
        _LOGGER.info(
            "content_written",
            uid=uid,
            bytes=len(content.data),
            meta_written=meta_written,
        )
        return uid

    def read(self, uid: str) -> tuple[bytes, dict[str, Any]] | None:
        """Load payload and metadata for a UID.

        Args:
            uid: Relative path returned by ``write``, or any file under the root.

        Returns:
            Pair of payload bytes and metadata, or None when no file exists.

        Raises:
            BadUID: If the UID contains ``../``.
        """
        self._validate_uid(uid)
        content_path = Path(self._absolute(uid))
        if not content_path.is_file():
            _LOGGER.info("content_missing", uid=uid)
            return None
        data = content_path.read_bytes()
        meta = read_meta(content_path)
        meta.setdefault(META_NAME_KEY, os.path.basename(uid))
        return data, meta

    def destroy(self, uid: str) -> None:
        """Delete a stored file, its sidecars, and newly empty directories.

        Raises:
            BadUID: If the UID contains ``../``.
        """
        self._validate_uid(uid)
        content_path = Path(self._absolute(uid))
        content_path.unlink(missing_ok=True)
        delete_meta(content_path)
        pruned = self._prune_empty_directories(content_path.parent)
        _LOGGER.info("content_destroyed", uid=uid, pruned_directories=pruned)

    def exists(self, uid: str) -> bool:
        """Return whether a file is stored under the UID."""
        self._validate_uid(uid)
        return Path(self._absolute(uid)).is_file()

    def url_for(self, uid: str) -> str:
        """Return the public URL path for a UID.

        Raises:
            BadUID: If the UID contains ``../``.
            UnableToFormUrl: If ``server_root`` does not cover the file.
        """
        self._validate_uid(uid)
        return public_url(self._root_path, self._server_root, uid)

    def disambiguate(self, path: str) -> str:
        """Return a new candidate for a colliding absolute path."""
        return disambiguate(path)

    def _absolute(self, relative_path: str) -> str:
        return os.path.join(str(self._root_path), relative_path)

    def _relative(self, absolute_path: str) -> str:
        root = str(self._root_path)
        if absolute_path.startswith(root):
            absolute_path = absolute_path[len(root):]
        return absolute_path.lstrip("/")

    def _validate_uid(self, uid: str) -> None:
        if "../" in uid:
            _LOGGER.warning("uid_rejected", uid=uid)
            raise BadUID(f"UID '{uid}' contains a parent directory reference")

    def _prune_empty_directories(self, directory: Path) -> int:
        """Remove empty directories from ``directory`` up to, not including, the root."""
        root = Path(os.path.abspath(self._root_path))
        current = Path(os.path.abspath(directory))
        pruned = 0
        while current != root and root in current.parents:
            if not current.is_dir() or any(current.iterdir()):
                break
            current.rmdir()
            pruned += 1
            current = current.parent
        return pruned

    def __repr__(self) -> str:
        return f"<FileDataStore root_path={str(self._root_path)!r}>"


def _optional_path(value: str | Path | None) -> Path | None:
    return Path(value) if value is not None else None


def _write_bytes(target: Path, data: bytes) -> None:
    """Write bytes through a sibling temp file so readers never see a partial file."""
    temp_path = target.with_name(f".{target.name}.tmp-{uuid4().hex}")
    try:
        temp_path.write_bytes(data)
        os.replace(temp_path, target)
    finally:
        temp_path.unlink(missing_ok=True)
