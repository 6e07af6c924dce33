"""Stowage CLI entry points.
This module exposes commands for writing, reading and deleting content.
It maps argparse commands onto file data store calls.
"""

from __future__ import annotations

import argparse
from dataclasses import replace
from pathlib import Path
import sys
from typing import Any, Sequence

from cli.url_command import add_url_command, run_url_command
from core.config import StoreConfig
from core.errors import BadUID
from core.types import Content, WriteOptions
from store.file_data_store import FileDataStore


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="stowage", description="Stowage file data store CLI")
    parser.add_argument("--root-path", help="Override STOWAGE_ROOT_PATH for this command")
    parser.add_argument("--server-root", help="Override STOWAGE_SERVER_ROOT for this command")
    parser.add_argument(
        "--no-meta",
        action="store_true",
        help="Do not write metadata sidecars",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_write_command(subparsers)
    _add_read_command(subparsers)
    _add_destroy_command(subparsers)
    add_url_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the Stowage CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    store = _build_store(args)
    if args.command == "write":
        return _run_write_command(store, args, parser)
    if args.command == "read":
        return _run_read_command(store, args)
    if args.command == "destroy":
        return _run_destroy_command(store, args)
    if args.command == "url":
        return run_url_command(store, args)
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_store(args: argparse.Namespace) -> FileDataStore:
    """Build a store from environment config and CLI overrides.

    Args:
        args: Parsed CLI args.

    Returns:
        Configured store.
    """
    config = StoreConfig.from_env()
    if args.root_path:
        config = replace(config, root_path=Path(args.root_path).expanduser())
    if args.server_root:
        config = replace(config, server_root=Path(args.server_root).expanduser())
    if args.no_meta:
        config = replace(config, store_meta=False)
    return FileDataStore(config)


def _run_write_command(
    store: FileDataStore,
    args: argparse.Namespace,
    parser: argparse.ArgumentParser,
) -> int:
    """Handle write command.

    Args:
        store: Target store.
        args: Parsed CLI args.
        parser: Parser used to report malformed --meta values.

    Returns:
        Exit code.
    """
    source = Path(args.source)
    meta: dict[str, Any] = {}
    for item in args.meta:
        key, separator, value = item.partition("=")
        if not separator or not key:
            parser.error(f"Invalid --meta value '{item}': expected KEY=VALUE")
        meta[key] = value
    content = Content(data=source.read_bytes(), meta=meta, name=args.name or source.name)
    uid = store.write(content, WriteOptions(path=args.path))
    print(uid)
    return 0


def _run_read_command(store: FileDataStore, args: argparse.Namespace) -> int:
    """Handle read command.

    Args:
        store: Source store.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    try:
        stored = store.read(args.uid)
    except BadUID as error:
        print(f"error={error}")
        return 1
    if stored is None:
        print(f"error=no content stored at '{args.uid}'")
        return 1
    data, meta = stored
    if args.output is None:
        sys.stdout.buffer.write(data)
        sys.stdout.buffer.flush()
        return 0
    Path(args.output).write_bytes(data)
    for key in sorted(meta.keys()):
        print(f"{key}={meta[key]}")
    return 0


def _run_destroy_command(store: FileDataStore, args: argparse.Namespace) -> int:
    """Handle destroy command.

    Args:
        store: Target store.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    try:
        store.destroy(args.uid)
    except BadUID as error:
        print(f"error={error}")
        return 1
    return 0


def _add_write_command(subparsers: Any) -> None:
    """Register write subcommand."""
    parser = subparsers.add_parser("write", help="Store a local file and print its uid")
    parser.add_argument("source", help="Local file to store")
    parser.add_argument("--path", help="Explicit relative storage path")
    parser.add_argument("--name", help="Logical name; defaults to the source file name")
    parser.add_argument(
        "--meta",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Metadata entry, may be repeated",
    )


def _add_read_command(subparsers: Any) -> None:
    """Register read subcommand."""
    parser = subparsers.add_parser("read", help="Read stored content by uid")
    parser.add_argument("uid", help="Stored content uid")
    parser.add_argument(
        "--output",
        help="Write payload to this file and print metadata rows instead of raw bytes",
    )


def _add_destroy_command(subparsers: Any) -> None:
    """Register destroy subcommand."""
    parser = subparsers.add_parser("destroy", help="Delete stored content by uid")
    parser.add_argument("uid", help="Stored content uid")
