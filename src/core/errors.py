"""Stowage exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each subsystem raises a specific error type for debuggability.
"""

from __future__ import annotations


class StowageError(Exception):
    """Base exception for all Stowage failures."""


class StowageConfigError(StowageError):
    """Raised for invalid runtime configuration."""


class StowageStoreError(StowageError):
    """Raised for data store failures."""


class BadUID(StowageStoreError):
    """Raised when a UID tries to climb out of the store root."""


class UnableToFormUrl(StowageStoreError):
    """Raised when no public URL can be derived for a UID."""


class StowageServeError(StowageError):
    """Raised for endpoint and job failures."""


class NoRoutingParams(StowageServeError):
    """Raised when a request environ carries no routing parameters."""


class NoSHAGiven(StowageServeError):
    """Raised when a signed fetch arrives without a SHA parameter."""


class IncorrectSHA(StowageServeError):
    """Raised when the SHA parameter does not match the request."""


class StowageValidationError(StowageError):
    """Raised for invalid property validation declarations."""
