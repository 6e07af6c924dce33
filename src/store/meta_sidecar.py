"""Metadata sidecar persistence.

Metadata lives next to its payload as ``<path>.meta.yml``. Older stores
used a flat ``<path>.meta`` file with one ``key: value`` pair per line;
that form is still read but never written.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

import yaml  # type: ignore[import-untyped]

from core.constants import LEGACY_META_FILE_SUFFIX, META_FILE_SUFFIX
from core.errors import StowageStoreError


def meta_path(content_path: Path) -> Path:
    """Return the YAML sidecar path for a content file."""
    return content_path.with_name(content_path.name + META_FILE_SUFFIX)


def legacy_meta_path(content_path: Path) -> Path:
    """Return the legacy flat-text sidecar path for a content file."""
    return content_path.with_name(content_path.name + LEGACY_META_FILE_SUFFIX)


def write_meta(content_path: Path, meta: Mapping[str, Any]) -> Path:
    """Serialize metadata as a YAML sidecar.

    Args:
        content_path: Absolute path of the stored payload.
        meta: Metadata mapping.

    Returns:
        Path of the written sidecar.
    """
    sidecar_path = meta_path(content_path)
    payload = yaml.safe_dump(dict(meta), explicit_start=True, default_flow_style=False)
    sidecar_path.write_text(payload, encoding="utf-8")
    return sidecar_path


def read_meta(content_path: Path) -> dict[str, Any]:
    """Load metadata for a content file.

    Args:
        content_path: Absolute path of the stored payload.

    Returns:
        Metadata from the YAML sidecar, else the legacy sidecar, else empty.

    Raises:
        StowageStoreError: If a sidecar exists but cannot be parsed.
    """
    sidecar_path = meta_path(content_path)
    if sidecar_path.exists():
        return _read_yaml_meta(sidecar_path)
    legacy_path = legacy_meta_path(content_path)
    if legacy_path.exists():
        return _read_legacy_meta(legacy_path)
    return {}


def delete_meta(content_path: Path) -> None:
    """Remove both sidecar forms if present."""
    meta_path(content_path).unlink(missing_ok=True)
    legacy_meta_path(content_path).unlink(missing_ok=True)


def _read_yaml_meta(sidecar_path: Path) -> dict[str, Any]:
    try:
        payload = yaml.safe_load(sidecar_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as error:
        raise StowageStoreError(
            f"Failed to parse metadata sidecar at {sidecar_path}: {error}. "
            "Fix or delete the sidecar file."
        ) from error
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise StowageStoreError(
            f"Invalid metadata sidecar at {sidecar_path}: "
            f"expected mapping, got {type(payload).__name__}."
        )
    return {str(key): value for key, value in payload.items()}


def _read_legacy_meta(sidecar_path: Path) -> dict[str, Any]:
    meta: dict[str, Any] = {}
    lines = sidecar_path.read_text(encoding="utf-8").splitlines()
    for line_number, line in enumerate(lines, 1):
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        key, separator, raw_value = stripped.partition(":")
        if not separator or not key.strip():
            raise StowageStoreError(
                f"Invalid legacy metadata at {sidecar_path}:{line_number}: "
                "expected 'key: value'."
            )
        meta[key.strip()] = _parse_legacy_value(raw_value.strip())
    return meta


def _parse_legacy_value(raw_value: str) -> Any:
    """Parse a legacy value as a YAML scalar, falling back to the raw text."""
    try:
        return yaml.safe_load(raw_value)
    except yaml.YAMLError:
        return raw_value
