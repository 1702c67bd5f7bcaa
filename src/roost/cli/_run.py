"""``roost run`` — start the server for an App or router."""

import argparse
import sys

from roost.app import App
from roost.cli._resolve import resolve_target
from roost.errors import ConfigurationError


def run_server(args: argparse.Namespace) -> None:
    try:
        target = resolve_target(args.target)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    app = target if isinstance(target, App) else App(target)

    try:
        app.compile()
    except ConfigurationError as exc:
        print(f"Invalid routes: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    from roost.server.dev import run_server as serve

    serve(
        app,
        args.host or app.config.host,
        args.port or app.config.port,
        workers=app.config.workers,
        reload=args.reload,
        app_path=args.target if args.reload else None,
        log_level=app.config.log_level,
    )
