"""Storage layer.

This module persists content payloads and metadata sidecars on disk.
It powers writing, reading, deleting and addressing stored files.
"""
