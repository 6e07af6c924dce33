"""Collision handling for candidate storage paths.

Check-then-write is not atomic: two writers deriving the same path at
the same moment may both see it free. Only a single writer per path
is supported.
"""

from __future__ import annotations

import os
import secrets
from typing import Callable

from core.constants import DISAMBIGUATION_SUFFIX_BYTES


def disambiguate(path: str) -> str:
    """Insert a random suffix before the extension of the last segment.

    Args:
        path: Colliding absolute path.

    Returns:
        New candidate, e.g. ``/some/file_3f9a1c.png`` for ``/some/file.png``.
    """
    directory, filename = os.path.split(path)
    stem, extension = os.path.splitext(filename)
    suffix = secrets.token_hex(DISAMBIGUATION_SUFFIX_BYTES)
    return os.path.join(directory, f"{stem}_{suffix}{extension}")


def resolve_free_path(path: str, disambiguate_path: Callable[[str], str]) -> str:
    """Return the first path in the disambiguation chain that does not exist.

    Args:
        path: Absolute candidate path.
        disambiguate_path: Called with each colliding path in turn.

    Returns:
        Absolute path with no existing filesystem entry.
    """
    while os.path.lexists(path):
        path = disambiguate_path(path)
    return path
