"""Routing — versioned resource declarations compiled into an ordered table.

Declarations are compiled once into an immutable ``RouteTable`` and
interpreted by a first-match-wins ``Dispatcher``.
"""

from roost.routing.builder import BuildContext, build_table
from roost.routing.declarations import Resource, Version, resource, version
from roost.routing.dispatcher import Dispatcher, match_entry
from roost.routing.entry import RouteEntry, RouteMatch
from roost.routing.table import RouteTable

__all__ = [
    "BuildContext",
    "Dispatcher",
    "Resource",
    "RouteEntry",
    "RouteMatch",
    "RouteTable",
    "Version",
    "build_table",
    "match_entry",
    "resource",
    "version",
]
