"""Serving components.

This module turns routed HTTP requests into fetch jobs and responses
backed by a file data store.
"""
