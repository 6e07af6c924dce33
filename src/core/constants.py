"""Core constants used across Stowage modules.

This module centralizes non-domain-specific constants.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

from pathlib import Path

DEFAULT_ROOT_PATH = Path(".stowage")
DEFAULT_FILE_NAME = "file"
DATE_PATH_FORMAT = "%Y/%m/%d/%H_%M_%S"
META_FILE_SUFFIX = ".meta.yml"
LEGACY_META_FILE_SUFFIX = ".meta"
META_NAME_KEY = "name"
DISAMBIGUATION_SUFFIX_BYTES = 6
ROOT_PATH_ENV = "STOWAGE_ROOT_PATH"
SERVER_ROOT_ENV = "STOWAGE_SERVER_ROOT"
STORE_META_ENV = "STOWAGE_STORE_META"
FETCH_SECRET_ENV = "STOWAGE_FETCH_SECRET"
FETCH_SHA_LENGTH = 16
ROUTING_PARAM_ENVIRON_KEYS = ("wsgiorg.routing_args", "stowage.params", "router.params")
DEFAULT_CONTENT_TYPE = "application/octet-stream"
