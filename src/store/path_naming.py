"""Relative path derivation for stored content.

This module turns a content name, an optional explicit path and the
current time into a candidate path relative to the store root.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
import re

from core.constants import DATE_PATH_FORMAT, DEFAULT_FILE_NAME

_UNSAFE_CHARACTERS = re.compile(r"[^A-Za-z0-9_.\-]+")
_SKIPPED_SEGMENTS = ("", ".", "..")


@dataclass
class WriteCounter:
    """Same-second sequence used in date-derived paths.

    Attributes:
        last_second: Wall-clock second of the previous write.
        counter: Sequence number handed out for ``last_second``.
    """

    last_second: datetime | None = None
    counter: int = 0

    def next(self, now: datetime) -> int:
        """Return the sequence number for a write happening at ``now``."""
        second = now.replace(microsecond=0)
        if second == self.last_second:
            self.counter += 1
        else:
            self.last_second = second
            self.counter = 0
        return self.counter


def sanitize_filename(name: str) -> str:
    """Collapse each run of unsafe characters into a single underscore.

    Args:
        name: Raw file name, e.g. from an upload.

    Returns:
        Name made of letters, digits, ``_``, ``.`` and ``-`` only.
    """
    return _UNSAFE_CHARACTERS.sub("_", name)


def sanitize_path(path: str) -> str:
    """Sanitize every segment of a relative path, keeping ``/`` separators.

    Empty, ``.`` and ``..`` segments are dropped so the result stays
    under the store root.
    """
    segments = [
        sanitize_filename(segment)
        for segment in path.split("/")
        if segment not in _SKIPPED_SEGMENTS
    ]
    return "/".join(segments)


def derive_path(
    name: str | None,
    path: str | None,
    now: datetime,
    counter: WriteCounter,
) -> str:
    """Propose a relative storage path for new content.

    Args:
        name: Optional logical content name.
        path: Optional caller-supplied relative path.
        now: Current time.
        counter: Same-second sequence state.

    Returns:
        Relative candidate path, not yet checked for collisions.
    """
    explicit_path = sanitize_path(path) if path else ""
    if explicit_path:
        return explicit_path
    sequence = counter.next(now)
    filename = sanitize_filename(name) if name else DEFAULT_FILE_NAME
    return f"{now.strftime(DATE_PATH_FORMAT)}_{sequence}_{filename}"
