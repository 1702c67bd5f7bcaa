"""``roost routes`` — list compiled resource routes.

Resolves an import string to a router (or an App wrapping one), compiles
its table, and prints every entry in dispatch order.
"""

import argparse
import sys

from roost.cli._resolve import resolve_target, router_of
from roost.errors import ConfigurationError


def format_rows(rows: list[tuple[str, str, str]]) -> list[str]:
    """Lay out (version, pattern, target) rows as an aligned table."""
    headers = ("VERSION", "PATTERN", "TARGET")
    widths = [max(len(h), *(len(r[i]) for r in rows)) for i, h in enumerate(headers)]
    fmt = f"{{:<{widths[0]}}}  {{:<{widths[1]}}}  {{}}"
    lines = [fmt.format(*headers), "-" * min(sum(widths) + 4, 80)]
    lines.extend(fmt.format(*row) for row in rows)
    return lines


def run_routes(args: argparse.Namespace) -> None:
    try:
        target = resolve_target(args.target)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    router = router_of(target)
    if router is None:
        print("No ResourceRouter found.", file=sys.stderr)
        raise SystemExit(1)

    try:
        table = router.table
    except ConfigurationError as exc:
        print(f"Invalid routes: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    rows = table.describe()
    for route in router.path_routes.routes:
        handler_name = getattr(route.handler, "__qualname__", repr(route.handler))
        rows.append(("-", f"{','.join(sorted(route.methods))} {route.path}", handler_name))

    if not rows:
        print("No routes declared.")
        return

    for line in format_rows(rows):
        print(line)
