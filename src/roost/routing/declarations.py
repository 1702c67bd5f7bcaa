"""Declarative route surface.

Routes are described as data: ``version`` blocks holding ordered
``resource`` declarations, each optionally holding one level of children::

    from roost.routing import resource, version

    routes = [
        version("v1",
            resource("posts", Posts, [
                resource("comments", Comments),
            ]),
            resource("authors", Authors),
        ),
    ]

which routes as::

    /v1/posts/*               -> Posts
    /v1/posts/:id/comments/*  -> Comments
    /v1/authors/*             -> Authors

Declarations are inert. Validation happens when the builder compiles
them into a ``RouteTable``.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Any


def _label(value: Any) -> str:
    """String form of a version or resource name (enum members use their value)."""
    if isinstance(value, Enum):
        value = value.value
    return str(value)


@dataclass(frozen=True, slots=True)
class Resource:
    """A named path segment mapped to a target, with optional children."""

    name: str
    target: Any
    children: tuple[Resource, ...] = ()

    @property
    def has_block(self) -> bool:
        return bool(self.children)


@dataclass(frozen=True, slots=True)
class Version:
    """The mandatory first path segment scoping a set of resources."""

    label: str
    resources: tuple[Resource, ...] = ()


def resource(name: Any, target: Any, children: Iterable[Resource] = ()) -> Resource:
    """Declare a resource, optionally with nested child resources.

    May be nested one level deep; deeper nesting is rejected when the
    table is built.
    """
    return Resource(name=_label(name), target=target, children=tuple(children))


def version(label: Any, *resources: Resource) -> Version:
    """Declare what version of the API a group of resources belongs to.

    *label* can be any value whose string form is a path segment, e.g.
    ``"v1"`` or an ``Enum`` member.
    """
    return Version(label=_label(label), resources=resources)
