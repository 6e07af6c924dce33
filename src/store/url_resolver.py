"""Public URL derivation for stored content.

A web server exposing ``server_root`` serves a stored file at the part
of its absolute path below that directory.
"""

from __future__ import annotations

import os
from pathlib import Path

from core.errors import UnableToFormUrl


def public_url(root_path: Path, server_root: Path | None, uid: str) -> str:
    """Compute the URL path under which ``uid`` is served.

    Args:
        root_path: Store root directory.
        server_root: Directory exposed as the web server root.
        uid: Relative path of the stored content.

    Returns:
        URL path starting with ``/``.

    Raises:
        UnableToFormUrl: If server_root is unset or does not contain the file.
    """
    if server_root is None:
        raise UnableToFormUrl(
            "server_root is not configured; set it to the directory your web "
            "server exposes in order to form urls"
        )
    file_path = os.path.abspath(os.path.join(str(root_path), uid))
    served_root = os.path.abspath(str(server_root))
    if file_path == served_root:
        return "/"
    prefix = served_root.rstrip("/") + "/"
    if not file_path.startswith(prefix):
        raise UnableToFormUrl(
            f"Cannot form url for '{uid}': {file_path} is not under server root {served_root}"
        )
    return "/" + file_path[len(prefix):]
