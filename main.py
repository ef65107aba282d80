"""
CLI entry point for tiercache.

Usage:
    python main.py lookup --id u1 --directory u1=Ada [--seed u2=Grace]
    python main.py demo
"""

import argparse
import asyncio
import json
import sys
from typing import Dict, List

from tiercache.config import get_settings
from tiercache.logging_setup import configure_logging
from tiercache.users import User, build_user_cache


def _parse_users(pairs: List[str]) -> Dict[str, User]:
    """Turn ``["u1=Ada", ...]`` into ``{"u1": User(name="Ada"), ...}``."""
    users: Dict[str, User] = {}
    for pair in pairs:
        identifier, sep, name = pair.partition("=")
        if not sep or not identifier:
            raise argparse.ArgumentTypeError(f"Expected ID=NAME, got '{pair}'")
        users[identifier] = User(name=name)
    return users


def _outcome(identifier: str, result) -> Dict:
    if result.ok:
        return {
            "id": identifier,
            "ok": True,
            "source": result.source,
            "user": result.value.model_dump(),
        }
    return {
        "id": identifier,
        "ok": False,
        "error": type(result.error).__name__,
        "detail": str(result.error),
    }


def cmd_lookup(args):
    """Fetch one user through the tiered cache."""
    try:
        directory = _parse_users(args.directory)
        seed = _parse_users(args.seed)
    except argparse.ArgumentTypeError as exc:
        print(f"Error: {exc}")
        sys.exit(2)

    cache = build_user_cache(directory=directory, seed=seed)
    try:
        result = asyncio.run(cache.fetch_result(args.id))
    except ValueError as exc:
        print(f"Error: {exc}")
        sys.exit(2)
    output = _outcome(args.id, result)
    output["local_store"] = {
        k: v.model_dump() for k, v in cache.local_store.snapshot().items()
    }
    print(json.dumps(output, indent=2))
    if not result.ok:
        sys.exit(1)


def cmd_demo(args):
    """Replay the three canonical scenarios."""

    async def _run():
        scenarios = [
            ("u1", {}, {"u1": User(name="Ada")}),
            ("u2", {"u2": User(name="Grace")}, {}),
            ("u3", {}, {}),
        ]
        for identifier, seed, directory in scenarios:
            cache = build_user_cache(directory=directory, seed=seed)
            result = await cache.fetch_result(identifier)
            output = _outcome(identifier, result)
            output["remote_calls"] = cache.remote_store.call_count
            output["local_store"] = sorted(cache.local_store.snapshot())
            print(json.dumps(output))

    asyncio.run(_run())


def main():
    parser = argparse.ArgumentParser(
        description="tiercache - local-first lookups with remote fallback"
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # lookup
    p_lookup = subparsers.add_parser("lookup", help="Fetch a user by id")
    p_lookup.add_argument("--id", required=True, help="Identifier to fetch")
    p_lookup.add_argument(
        "--seed", action="append", default=[], help="Local entry as ID=NAME"
    )
    p_lookup.add_argument(
        "--directory", action="append", default=[], help="Remote entry as ID=NAME"
    )

    # demo
    subparsers.add_parser("demo", help="Run the built-in scenarios")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    configure_logging(get_settings().logging)

    commands = {
        "lookup": cmd_lookup,
        "demo": cmd_demo,
    }
    commands[args.command](args)


if __name__ == "__main__":
    main()
