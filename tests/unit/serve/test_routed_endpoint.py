"""Unit tests for the routed fetch endpoint."""

from __future__ import annotations

import pytest

from core.errors import NoRoutingParams, StowageServeError
from core.types import Content, WriteOptions
from serve.fetch_job import build_fetch_job, sign_uid
from serve.routed_endpoint import RoutedEndpoint
from store.file_data_store import FileDataStore


def _store_with_file(tmp_path) -> tuple[FileDataStore, str]:
    store = FileDataStore(root_path=tmp_path)
    uid = store.write(Content(b"pixels", meta={"name": "egg.png"}), WriteOptions(path="egg.png"))
    return store, uid


def _signed_builder(secret: str):
    def build(params, store):
        return build_fetch_job(params, store, secret=secret)

    return build


def test_respond_serves_stored_file(tmp_path) -> None:
    """Endpoint should return the payload with a guessed content type."""
    store, uid = _store_with_file(tmp_path)
    endpoint = RoutedEndpoint(store, build_fetch_job, name="images")

    status, headers, body = endpoint.respond({"stowage.params": {"uid": uid}})

    assert status == 200
    assert ("Content-Type", "image/png") in headers
    assert body == [b"pixels"]


def test_respond_merges_query_and_wsgiorg_routing_args(tmp_path) -> None:
    """Routing parameters should override query parameters."""
    store, uid = _store_with_file(tmp_path)
    endpoint = RoutedEndpoint(store, build_fetch_job)
    environ = {"QUERY_STRING": "uid=missing", "wsgiorg.routing_args": ((), {"uid": uid})}

    status, _, _ = endpoint.respond(environ)

    assert status == 200


def test_respond_returns_not_found_for_missing_and_bad_uids(tmp_path) -> None:
    """Missing files and traversal UIDs should both be served as 404."""
    store, _ = _store_with_file(tmp_path)
    endpoint = RoutedEndpoint(store, build_fetch_job)

    missing = endpoint.respond({"router.params": {"uid": "nope.png"}})
    traversal = endpoint.respond({"router.params": {"uid": "../egg.png"}})

    assert missing[0] == traversal[0] == 404


def test_respond_raises_without_routing_params(tmp_path) -> None:
    """Endpoint should refuse environs the router never touched."""
    store, _ = _store_with_file(tmp_path)
    endpoint = RoutedEndpoint(store, build_fetch_job)

    with pytest.raises(NoRoutingParams):
        endpoint.respond({"QUERY_STRING": "uid=egg.png"})


def test_build_fetch_job_requires_uid(tmp_path) -> None:
    """A request without a uid parameter should be rejected."""
    store, _ = _store_with_file(tmp_path)

    with pytest.raises(StowageServeError):
        build_fetch_job({}, store)


def test_respond_rejects_missing_sha(tmp_path) -> None:
    """Signed endpoints should answer 400 when no SHA is given."""
    store, uid = _store_with_file(tmp_path)
    endpoint = RoutedEndpoint(store, _signed_builder("s3cret"))

    status, headers, body = endpoint.respond({"stowage.params": {"uid": uid}})

    assert status == 400
    assert headers == [("Content-Type", "text/plain")]
    assert body == [b"You need to give a SHA parameter"]


def test_respond_rejects_incorrect_sha(tmp_path) -> None:
    """Signed endpoints should echo the wrong SHA in a 400 response."""
    store, uid = _store_with_file(tmp_path)
    endpoint = RoutedEndpoint(store, _signed_builder("s3cret"))

    status, _, body = endpoint.respond({"QUERY_STRING": "sha=abc", "stowage.params": {"uid": uid}})

    assert status == 400
    assert body == [b"The SHA parameter you gave (abc) is incorrect"]


def test_respond_accepts_correct_sha(tmp_path) -> None:
    """Signed endpoints should serve requests carrying the right SHA."""
    store, uid = _store_with_file(tmp_path)
    endpoint = RoutedEndpoint(store, _signed_builder("s3cret"))
    sha = sign_uid(uid, "s3cret")

    status, _, _ = endpoint.respond({"QUERY_STRING": f"sha={sha}", "stowage.params": {"uid": uid}})

    assert status == 200


def test_call_speaks_wsgi(tmp_path) -> None:
    """The WSGI wrapper should pass a status line to start_response."""
    store, uid = _store_with_file(tmp_path)
    endpoint = RoutedEndpoint(store, build_fetch_job, name="images")
    started = []

    body = endpoint({"stowage.params": {"uid": uid}}, lambda status, headers: started.append(status))

    assert started == ["200 OK"]
    assert body == [b"pixels"]
    assert repr(endpoint) == "<RoutedEndpoint for store 'images'>"
