"""Plain method + path routes served alongside resource routes.

Used for endpoints that are not resources, such as ``/ping`` or
``/health/{check}``::

    router = ResourceRouter(routes)

    @router.get("/ping")
    def ping(conn, opts):
        return conn.resp(200, "pong")

Paths are parsed into literal and ``{param}`` segments once, at
registration. A trailing ``{name:path}`` segment captures the rest of
the path.
"""

import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from roost.errors import ConfigurationError, MethodNotAllowed

# (regex_pattern, python_type) for each supported converter
CONVERTERS: dict[str, tuple[str, type]] = {
    "str": (r"[^/]+", str),
    "int": (r"\d+", int),
    "path": (r".*", str),
}


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a plain route path.

    Static:  ``/ping``        (is_param=False)
    Param:   ``/{check}``     (is_param=True, param_name="check")
    Typed:   ``/{n:int}``     (is_param=True, param_name="n", param_type="int")
    """

    value: str
    is_param: bool = False
    param_name: str | None = None
    param_type: str = "str"


@dataclass(frozen=True, slots=True)
class PathRoute:
    """A plain route: literal/param segments, handler and allowed methods."""

    path: str
    handler: Callable[..., Any]
    methods: frozenset[str]
    segments: tuple[PathSegment, ...]


@dataclass(frozen=True, slots=True)
class PathMatch:
    """Result of a successful plain-route match."""

    route: PathRoute
    path_params: dict[str, str | int]


def parse_path(path: str) -> tuple[PathSegment, ...]:
    """Parse a route path string into segments.

    Examples::

        "/ping"                -> (PathSegment("ping"),)
        "/health/{check}"      -> (PathSegment("health"), PathSegment("{check}", is_param=True, ...))
        "/files/{rest:path}"   -> (..., PathSegment("{rest:path}", is_param=True, param_type="path"))
    """
    segments: list[PathSegment] = []
    parts = [p for p in path.strip("/").split("/") if p]
    for index, part in enumerate(parts):
        if not (part.startswith("{") and part.endswith("}")):
            segments.append(PathSegment(value=part))
            continue
        name, _, param_type = part[1:-1].partition(":")
        param_type = param_type or "str"
        if param_type not in CONVERTERS:
            msg = f"Unknown converter {param_type!r} in route {path!r}."
            raise ConfigurationError(msg)
        if param_type == "path" and index != len(parts) - 1:
            msg = f"A {{name:path}} segment must be last in route {path!r}."
            raise ConfigurationError(msg)
        segments.append(
            PathSegment(value=part, is_param=True, param_name=name, param_type=param_type)
        )
    return tuple(segments)


def convert_param(value: str, param_type: str) -> str | int:
    """Convert a captured segment to its converter's Python type.

    Raises ``KeyError`` if *param_type* is not a registered converter.
    """
    _, target_type = CONVERTERS[param_type]
    return target_type(value)


def _match_segments(
    segments: tuple[PathSegment, ...],
    parts: Sequence[str],
) -> dict[str, str | int] | None:
    params: dict[str, str | int] = {}
    for index, seg in enumerate(segments):
        if seg.is_param and seg.param_type == "path":
            params[seg.param_name or "path"] = "/".join(parts[index:])
            return params
        if index >= len(parts):
            return None
        part = parts[index]
        if not seg.is_param:
            if part != seg.value:
                return None
            continue
        pattern, _ = CONVERTERS[seg.param_type]
        if re.fullmatch(pattern, part) is None:
            return None
        params[seg.param_name or ""] = convert_param(part, seg.param_type)
    if len(parts) != len(segments):
        return None
    return params


class PathRouter:
    """Ordered plain-route lookup.

    Routes are tried in registration order. The first route whose path
    matches and accepts the method wins; a path that matches only for
    other methods raises ``MethodNotAllowed``.
    """

    __slots__ = ("_compiled", "_routes")

    def __init__(self) -> None:
        self._routes: list[PathRoute] = []
        self._compiled = False

    def add(
        self,
        path: str,
        handler: Callable[..., Any],
        methods: Sequence[str] = ("GET",),
    ) -> PathRoute:
        """Register a route. Must be called before compile()."""
        if self._compiled:
            msg = "Cannot add routes after compilation."
            raise RuntimeError(msg)
        route = PathRoute(
            path=path,
            handler=handler,
            methods=frozenset(m.upper() for m in methods),
            segments=parse_path(path),
        )
        self._routes.append(route)
        return route

    @property
    def routes(self) -> tuple[PathRoute, ...]:
        return tuple(self._routes)

    def compile(self) -> None:
        """Freeze the router. No more routes can be added."""
        self._compiled = True

    def match(self, method: str, parts: Sequence[str]) -> PathMatch | None:
        """Match *parts* and *method* against registered routes.

        Returns ``None`` if no route matches the path.
        Raises ``MethodNotAllowed`` if the path matches but the method doesn't.
        """
        allowed: set[str] = set()
        for route in self._routes:
            params = _match_segments(route.segments, parts)
            if params is None:
                continue
            if method in route.methods:
                return PathMatch(route=route, path_params=params)
            allowed |= route.methods
        if allowed:
            raise MethodNotAllowed(frozenset(allowed))
        return None
