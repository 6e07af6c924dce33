"""Fetch jobs for serving stored content.

A job is built from merged request parameters and turned into a
``(status, headers, body)`` response triple by the endpoint.
"""

from __future__ import annotations

import hashlib
import hmac
import mimetypes
from typing import Any, Mapping

from core.constants import DEFAULT_CONTENT_TYPE, FETCH_SHA_LENGTH, META_NAME_KEY
from core.errors import BadUID, IncorrectSHA, NoSHAGiven, StowageServeError
from store.file_data_store import FileDataStore

ResponseTriple = tuple[int, list[tuple[str, str]], list[bytes]]


def sign_uid(uid: str, secret: str) -> str:
    """Return the SHA parameter that authorizes fetching ``uid``."""
    digest = hmac.new(secret.encode("utf-8"), uid.encode("utf-8"), hashlib.sha256)
    return digest.hexdigest()[:FETCH_SHA_LENGTH]


class FetchJob:
    """Job that serves one stored file."""

    def __init__(self, store: FileDataStore, uid: str) -> None:
        self.store = store
        self.uid = uid

    def to_response(self) -> ResponseTriple:
        """Read the stored file and build a response triple."""
        try:
            stored = self.store.read(self.uid)
        except BadUID:
            stored = None
        if stored is None:
            return _not_found()
        data, meta = stored
        name = meta.get(META_NAME_KEY)
        content_type = DEFAULT_CONTENT_TYPE
        if isinstance(name, str):
            content_type = mimetypes.guess_type(name)[0] or DEFAULT_CONTENT_TYPE
        headers = [
            ("Content-Type", content_type),
            ("Content-Length", str(len(data))),
        ]
        return 200, headers, [data]

    def __repr__(self) -> str:
        return f"<FetchJob uid={self.uid!r}>"


def build_fetch_job(
    params: Mapping[str, Any],
    store: FileDataStore,
    secret: str | None = None,
) -> FetchJob:
    """Build a fetch job from request parameters.

    Args:
        params: Merged query and routing parameters.
        store: Store holding the content.
        secret: When set, requests must carry a matching ``sha`` parameter.

    Returns:
        Job for the requested UID.

    Raises:
        StowageServeError: If no ``uid`` parameter is present.
        NoSHAGiven: If a secret is configured and ``sha`` is missing.
        IncorrectSHA: If ``sha`` does not match the UID.
    """
    uid = params.get("uid")
    if not uid:
        raise StowageServeError("Fetch request has no 'uid' parameter.")
    uid = str(uid)
    if secret is not None:
        sha = params.get("sha")
        if not sha:
            raise NoSHAGiven("You need to give a SHA parameter")
        if not hmac.compare_digest(str(sha), sign_uid(uid, secret)):
            raise IncorrectSHA(str(sha))
    return FetchJob(store, uid)


def _not_found() -> ResponseTriple:
    return 404, [("Content-Type", "text/plain")], [b"Not found"]
