"""Server startup.

Starts a pounce ASGI server with the live roost App object.
"""


def run_server(
    app: object,
    host: str,
    port: int,
    *,
    workers: int = 1,
    reload: bool = False,
    app_path: str | None = None,
    log_level: str = "info",
) -> None:
    """Start a pounce server with the given roost App.

    Pounce's ``run()`` takes an import string (e.g., ``"myapi:app"``),
    but roost has a live ``App`` object. We use ``pounce.Server``
    directly with the ASGI callable.

    Args:
        app: ASGI callable (roost App instance).
        host: Bind host address.
        port: Bind port number.
        workers: Worker count (reload forces a single worker).
        reload: Enable auto-reload on file changes.
        app_path: Optional ``"module:attribute"`` import string. When
            provided, pounce reimports the app on each reload cycle.
        log_level: Server log level (debug, info, warning, error, critical).
    """
    try:
        from pounce.config import ServerConfig
        from pounce.server import Server
    except ImportError as exc:
        msg = "Serving requires the 'pounce' server. Install it with: pip install roost[server]"
        raise RuntimeError(msg) from exc

    config = ServerConfig(
        host=host,
        port=port,
        workers=1 if reload else workers,
        reload=reload,
        log_level=log_level,
    )
    server = Server(config, app, app_path=app_path)
    server.run()
