"""Public SDK surface for Stowage.

This module provides a stable import path for library users.
It re-exports the store, its typed models and the serving adapters.
"""

from __future__ import annotations

from core.config import StoreConfig
from core.errors import BadUID, StowageError, UnableToFormUrl
from core.types import Content, WriteOptions
from serve.fetch_job import FetchJob, build_fetch_job, sign_uid
from serve.routed_endpoint import RoutedEndpoint
from store.file_data_store import FileDataStore
from store.registry import StoreRegistry
from validation.property_rules import (
    ComputedMessage,
    PropertyRule,
    StaticMessage,
    validate_properties,
)

__all__ = [
    "BadUID",
    "ComputedMessage",
    "Content",
    "FetchJob",
    "FileDataStore",
    "PropertyRule",
    "RoutedEndpoint",
    "StaticMessage",
    "StoreConfig",
    "StoreRegistry",
    "StowageError",
    "UnableToFormUrl",
    "WriteOptions",
    "build_fetch_job",
    "sign_uid",
    "validate_properties",
]
