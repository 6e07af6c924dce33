"""Attachment property validation.

This module checks properties of attachment-bearing records against
allowed values and builds human-readable error messages.
"""
