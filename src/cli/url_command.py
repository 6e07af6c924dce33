"""URL command wiring for Stowage CLI."""

from __future__ import annotations

import argparse
from typing import Any

from core.errors import BadUID, UnableToFormUrl
from store.file_data_store import FileDataStore


def add_url_command(subparsers: Any) -> None:
    """Register url subcommand."""
    parser = subparsers.add_parser(
        "url",
        help="Print the public url of stored content under --server-root",
    )
    parser.add_argument("uid", help="Stored content uid")


def run_url_command(store: FileDataStore, args: argparse.Namespace) -> int:
    """Print the url for a uid, or an error row when none can be formed."""
    try:
        url = store.url_for(args.uid)
    except (BadUID, UnableToFormUrl) as error:
        print(f"error={error}")
        return 1
    print(url)
    return 0
