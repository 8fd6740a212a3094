from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path

from .errors import PropertyManagerError
from .manager import PropertyManager
from .providers import provider_for_path
from .providers.line_format import format_binding
from .values import ADAPTERS, ValueKind, display_value

DEBUG_ENV = "PROPMAN_DEBUG"

logger = logging.getLogger("propman")


def _enable_debug_logging() -> None:
    if os.environ.get(DEBUG_ENV) and not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(levelname)s:%(name)s:%(message)s"))
        logger.addHandler(handler)
        logger.setLevel(logging.DEBUG)


def _manager(args: argparse.Namespace, *, editable: bool = False) -> PropertyManager:
    provider = provider_for_path(
        args.path,
        editable=editable,
        collection=args.collection,
        comment_sign=args.comment_sign,
    )
    return PropertyManager(provider)


def show_cmd(args: argparse.Namespace) -> int:
    manager = _manager(args)
    entries = [e for e in manager.entries if not e.is_passthrough]
    if args.as_json:
        data = [
            {
                "path": e.path,
                "kind": str(e.kind),
                "value": e.value,
                "is_static": e.is_static,
                "is_field": e.is_field,
            }
            for e in entries
        ]
        print(json.dumps(data, indent=2))
    else:
        for entry in entries:
            print(format_binding(entry))
    return 0


def get_cmd(args: argparse.Namespace) -> int:
    manager = _manager(args)
    if args.type:
        kind = ValueKind(args.type)
        value = manager.get_value(args.key, kind)
    else:
        entry = manager.get_entry(args.key)
        kind, value = entry.kind, entry.value
    print(display_value(kind, value))
    return 0


def set_cmd(args: argparse.Namespace) -> int:
    manager = _manager(args, editable=True)
    # read VALUE as the kind already stored under KEY
    entry = manager.get_entry(args.key)
    value = ADAPTERS[entry.kind].parse(args.value)
    manager.set_value(args.key, value)
    manager.save()
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="propman", description="Inspect and edit property stores."
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    store = argparse.ArgumentParser(add_help=False)
    store.add_argument("path", type=Path, help="Property file or database")
    store.add_argument("--collection", help="Collection name for document stores")
    store.add_argument("--comment-sign", help="Comment marker for property files")

    p_show = subparsers.add_parser("show", parents=[store], help="List all entries.")
    p_show.add_argument("--json", dest="as_json", action="store_true")
    p_show.set_defaults(func=show_cmd)

    p_get = subparsers.add_parser("get", parents=[store], help="Print the value for KEY.")
    p_get.add_argument("key")
    p_get.add_argument("--type", choices=[k.value for k in ValueKind])
    p_get.set_defaults(func=get_cmd)

    p_set = subparsers.add_parser(
        "set", parents=[store], help="Set KEY to VALUE and save the store."
    )
    p_set.add_argument("key")
    p_set.add_argument("value")
    p_set.set_defaults(func=set_cmd)

    return parser


def main(argv: list[str] | None = None) -> int:
    _enable_debug_logging()
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        return int(args.func(args))
    except (PropertyManagerError, ValueError) as exc:
        print(f"propman: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
