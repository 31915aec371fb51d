"""CLI entry point for Yokozuna index administration and queries."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    from yokozuna.config.settings import Settings
    from yokozuna.observability.logging import setup_logging
    from yokozuna.transport.exceptions import YokozunaError

    try:
        settings = Settings.from_yaml(args.config) if args.config else Settings()
    except YokozunaError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    # Apply CLI overrides
    if args.host:
        settings.connection.host = args.host
    if args.port:
        settings.connection.port = args.port
    if args.log_level:
        settings.observability.log_level = args.log_level

    setup_logging(settings.observability)

    try:
        output = asyncio.run(_run(args, settings))
    except (YokozunaError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print(json.dumps(output, indent=2, default=str))


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="yokozuna",
        description="Manage Riak Search (Yokozuna) indexes and run queries",
    )
    parser.add_argument("--config", "-c", type=str, default=None, help="Path to YAML configuration file")
    parser.add_argument("--host", type=str, default=None, help="Riak host (overrides config)")
    parser.add_argument("--port", "-p", type=int, default=None, help="Riak HTTP port (overrides config)")
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["debug", "info", "warning", "error"],
        default=None,
        help="Log level (overrides config)",
    )
    parser.add_argument("--version", action="version", version=f"yokozuna {_get_version()}")

    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("create-schema", help="Upload a Solr schema")
    p.add_argument("name")
    p.add_argument("file", type=Path, help="Schema XML file")

    p = sub.add_parser("create-index", help="Create a search index")
    p.add_argument("index")
    p.add_argument("--schema", default=None, help="Schema name (default: _yz_default)")

    p = sub.add_parser("destroy-index", help="Delete a search index")
    p.add_argument("index")

    p = sub.add_parser("associate", help="Index a bucket into a search index")
    p.add_argument("index")
    p.add_argument("bucket")

    p = sub.add_parser("disassociate", help="Stop indexing a bucket")
    p.add_argument("bucket")

    p = sub.add_parser("find", help="Query a search index")
    p.add_argument("index")
    p.add_argument("query")
    p.add_argument(
        "--option",
        "-o",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Extra Solr query parameter, repeatable (e.g. -o rows=5 -o facet.field=genre)",
    )
    return parser


async def _run(args: argparse.Namespace, settings: Any) -> Any:
    from yokozuna.client.client import DEFAULT_SCHEMA, AsyncYokozunaClient
    from yokozuna.transport.http import HttpExecutor

    async with HttpExecutor(settings.connection.base_url, timeout=settings.connection.timeout) as executor:
        client = AsyncYokozunaClient.from_settings(settings, executor)

        if args.command == "create-schema":
            meta = await client.create_schema(args.name, args.file.read_text(encoding="utf-8"))
        elif args.command == "create-index":
            meta = await client.create_index(args.index, args.schema or DEFAULT_SCHEMA)
        elif args.command == "destroy-index":
            meta = await client.destroy_index(args.index)
        elif args.command == "associate":
            meta = await client.associate_index_with_bucket(args.index, args.bucket)
        elif args.command == "disassociate":
            meta = await client.disassociate_index_from_bucket(args.bucket)
        elif args.command == "find":
            return await client.find(args.index, args.query, **_parse_options(args.option))
        else:
            raise ValueError(f"Unknown command: {args.command}")

    logger.info("%s completed", args.command)
    return {"status": "ok", "status_code": meta.status_code if meta else None}


def _parse_options(pairs: list[str]) -> dict[str, str]:
    """Turn ``["rows=5", "sort=score desc"]`` into a parameter dict."""
    options: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise SystemExit(f"Error: invalid option {pair!r}, expected KEY=VALUE")
        options[key] = value
    return options


def _get_version() -> str:
    """Get the package version."""
    try:
        from yokozuna import __version__

        return __version__
    except ImportError:
        return "unknown"


if __name__ == "__main__":
    main()
