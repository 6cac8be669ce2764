# -*- coding: utf-8 -*-
"""
progcat CLI - Inspect, refresh and flash catalogs from the command line.

Usage::

    python -m progcat catalog
    python -m progcat refresh
    python -m progcat upload blink --board uno --port /dev/ttyACM0
    python -m progcat --config my_config.json config

License
-------
MIT License
Copyright (c) 2026 progcat contributors
See LICENSE file for full text.

Created
-------
2026-10-19

Modified
--------
2026-10-19
"""

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import List, Optional


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="progcat",
        description="progcat - Manage a program catalog and flash boards.",
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to a JSON configuration file.",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("catalog", help="Resolve and print the catalog as JSON.")
    sub.add_parser("refresh", help="Download the remote catalog into staging.")
    sub.add_parser("config", help="Print the effective configuration.")

    upload = sub.add_parser("upload", help="Flash a catalog entry onto a board.")
    upload.add_argument("entry", help="Path (namespace) of the catalog entry.")
    upload.add_argument("--board", "-b", default=None, help="Target board.")
    upload.add_argument("--port", "-p", default=None, help="Serial port.")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    from progcat.core.config import load_config
    from progcat.service import CatalogService

    config = load_config(args.config)
    if args.command == "config":
        print(json.dumps(config.to_dict(), indent=2))
        return 0

    if args.command == "upload" and args.port:
        config = replace(config, upload=replace(config.upload, port=args.port))

    with CatalogService(config) as service:
        if args.command == "refresh":
            if service.refresher is None:
                print("Error: catalog updates are disabled", file=sys.stderr)
                return 1
            return 0 if service.refresher.refresh() else 1

        document = service.get_catalog()
        if document is None:
            print("Error: no valid catalog available", file=sys.stderr)
            return 1

        if args.command == "catalog":
            print(json.dumps(document, indent=2))
            return 0

        entry = service.catalog.find_entry(args.entry)
        if entry is None:
            print(f"Error: no catalog entry {args.entry!r}", file=sys.stderr)
            return 1
        message = service.upload_program(entry, args.board)
        print(message)
        return 0 if message == "Done" else 1


if __name__ == "__main__":
    sys.exit(main())
