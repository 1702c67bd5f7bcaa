"""Route definition builder — compiles declarations into a RouteTable.

Walks ``version`` blocks and their ``resource`` declarations in order and
emits one ``RouteEntry`` per resource. The "current version" and "current
parent" are carried in an explicit ``BuildContext`` passed down the
recursion, so sibling declarations never see each other's scope.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, replace

from roost.config import RouterConfig
from roost.errors import ConfigurationError, NestingError
from roost.routing.declarations import Resource, Version
from roost.routing.entry import RouteEntry
from roost.routing.table import RouteTable

logger = logging.getLogger("roost.routing")


@dataclass(frozen=True, slots=True)
class BuildContext:
    """Scope in effect while a declaration is compiled."""

    version: str | None = None
    parent: str | None = None

    def enter_version(self, label: str) -> BuildContext:
        return replace(self, version=label, parent=None)

    def enter_resource(self, name: str) -> BuildContext:
        return replace(self, parent=name)


def _check_segment(kind: str, value: str) -> None:
    if not value:
        msg = f"{kind} name must be a non-empty path segment."
        raise ConfigurationError(msg)
    if "/" in value:
        msg = (
            f"{kind} name {value!r} contains '/'. Names are matched as a single "
            "literal path segment; declare nested resources with a children list."
        )
        raise ConfigurationError(msg)


def _compile_resource(
    declaration: Resource,
    context: BuildContext,
    entries: list[RouteEntry],
) -> None:
    """Emit entries for *declaration*'s children, then its own entry.

    A top-level pattern matches any path under its prefix, so the parent
    must come after its children or it would shadow every nested route.
    """
    _check_segment("Resource", declaration.name)
    if context.version is None:
        msg = f"Resource {declaration.name!r} must be declared inside a version() block."
        raise ConfigurationError(msg)

    if declaration.target is None or not callable(declaration.target):
        msg = (
            f"Resource {declaration.name!r} in version {context.version!r} has no "
            f"callable handler (got {declaration.target!r})."
        )
        raise ConfigurationError(msg)

    if context.parent is not None and declaration.has_block:
        msg = (
            f"Resource {declaration.name!r} is nested in {context.parent!r} and "
            "declares children of its own. Resources may be nested one level deep."
        )
        raise NestingError(msg)

    if declaration.has_block:
        child_context = context.enter_resource(declaration.name)
        for child in declaration.children:
            if not isinstance(child, Resource):
                msg = f"Expected a resource() declaration inside {declaration.name!r}, got {child!r}."
                raise ConfigurationError(msg)
            _compile_resource(child, child_context, entries)

    entries.append(
        RouteEntry(
            version=context.version,
            name=declaration.name,
            target=declaration.target,
            nested_in=context.parent,
        )
    )


def _compile_version(
    declaration: Version,
    context: BuildContext,
    entries: list[RouteEntry],
) -> None:
    _check_segment("Version", declaration.label)
    scoped = context.enter_version(declaration.label)
    for item in declaration.resources:
        if not isinstance(item, Resource):
            msg = f"Expected a resource() declaration inside version {declaration.label!r}, got {item!r}."
            raise ConfigurationError(msg)
        _compile_resource(item, scoped, entries)


def _report_duplicates(entries: list[RouteEntry], config: RouterConfig) -> None:
    """Flag entries that can never match because an earlier entry has the same pattern."""
    if config.duplicates == "ignore":
        return
    first_seen: dict[tuple[str, str | None, str], RouteEntry] = {}
    for entry in entries:
        earlier = first_seen.setdefault(entry.key, entry)
        if earlier is entry:
            continue
        msg = f"Route {entry.pattern} is declared more than once; only the first declaration is reachable."
        if config.duplicates == "error":
            raise ConfigurationError(msg)
        logger.warning(msg)


def build_table(
    declarations: Iterable[Version],
    config: RouterConfig | None = None,
) -> RouteTable:
    """Compile version declarations into an ordered ``RouteTable``.

    Entries appear in the order declarations were written. A resource
    with children is emitted after its children.

    Raises ``ConfigurationError`` for a declaration without a callable
    handler, an empty or multi-segment name, or a resource declared
    outside a version block. Raises ``NestingError`` when nesting
    exceeds one level.
    """
    config = config or RouterConfig()
    entries: list[RouteEntry] = []
    root = BuildContext()

    for declaration in declarations:
        if isinstance(declaration, Resource):
            msg = f"Resource {declaration.name!r} must be declared inside a version() block."
            raise ConfigurationError(msg)
        if not isinstance(declaration, Version):
            msg = f"Expected a version() declaration, got {declaration!r}."
            raise ConfigurationError(msg)
        _compile_version(declaration, root, entries)

    _report_duplicates(entries, config)

    table = RouteTable(entries)
    logger.debug("Compiled %d route entries across %d version(s)", len(table), len(table.versions))
    return table
