"""WSGI endpoint for routed fetch requests.

An upstream router matches the request path and leaves its parameters
in the WSGI environ; this endpoint merges them with the query string,
asks a job builder for a job and renders the job's response.
"""

from __future__ import annotations

from http import HTTPStatus
from typing import Any, Callable, Iterable, Mapping, Protocol
from urllib.parse import parse_qsl

from core.constants import ROUTING_PARAM_ENVIRON_KEYS
from core.errors import IncorrectSHA, NoRoutingParams, NoSHAGiven
from core.logging_config import get_logger
from store.file_data_store import FileDataStore

_LOGGER = get_logger(__name__)

ResponseTriple = tuple[int, list[tuple[str, str]], list[bytes]]


class Job(Protocol):
    """Anything convertible to a response triple."""

    def to_response(self) -> ResponseTriple: ...


JobBuilder = Callable[[dict[str, Any], FileDataStore], Job]


class RoutedEndpoint:
    """Endpoint that serves jobs built from routing parameters."""

    def __init__(
        self,
        store: FileDataStore,
        job_builder: JobBuilder,
        name: str | None = None,
    ) -> None:
        self._store = store
        self._job_builder = job_builder
        self._name = name

    def respond(self, environ: Mapping[str, Any]) -> ResponseTriple:
        """Build a response triple for a WSGI environ.

        Raises:
            NoRoutingParams: If the router left no parameters in the environ.
        """
        params = dict(parse_qsl(str(environ.get("QUERY_STRING", "")), keep_blank_values=True))
        params.update(_routing_params(environ))
        try:
            job = self._job_builder(params, self._store)
            return job.to_response()
        except NoSHAGiven:
            _LOGGER.warning("fetch_rejected", reason="no_sha")
            return _bad_request("You need to give a SHA parameter")
        except IncorrectSHA as error:
            _LOGGER.warning("fetch_rejected", reason="incorrect_sha")
            return _bad_request(f"The SHA parameter you gave ({error}) is incorrect")

    def __call__(
        self,
        environ: dict[str, Any],
        start_response: Callable[..., Any],
    ) -> Iterable[bytes]:
        status, headers, body = self.respond(environ)
        start_response(f"{status} {HTTPStatus(status).phrase}", headers)
        return body

    def __repr__(self) -> str:
        return f"<{type(self).__name__} for store {self._name!r}>"


def _routing_params(environ: Mapping[str, Any]) -> dict[str, Any]:
    for key in ROUTING_PARAM_ENVIRON_KEYS:
        value = environ.get(key)
        if value is None:
            continue
        if key == "wsgiorg.routing_args":
            # (positional_args, named_args)
            return dict(value[1])
        return dict(value)
    raise NoRoutingParams(
        f"Couldn't find any routing parameters in environ keys {', '.join(ROUTING_PARAM_ENVIRON_KEYS)}"
    )


def _bad_request(message: str) -> ResponseTriple:
    return 400, [("Content-Type", "text/plain")], [message.encode("utf-8")]
