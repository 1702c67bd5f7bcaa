"""Import resolution — resolves ``"module:attribute"`` strings to roost objects.

Shared by ``roost routes`` and ``roost run``.
"""

import importlib

from roost.app import App
from roost.router import ResourceRouter


def resolve_target(import_string: str) -> App | ResourceRouter:
    """Resolve an import string to an ``App`` or ``ResourceRouter``.

    Accepts ``"module:attribute"`` format. When the attribute portion is
    omitted, defaults to ``"app"`` (e.g. ``"myapi"`` resolves to
    ``myapi.app``). Factory functions are called.

    Raises:
        ModuleNotFoundError: If the module cannot be imported.
        AttributeError: If the attribute does not exist on the module.
        TypeError: If the resolved object is neither an App nor a router.
    """
    module_path, _, attr_name = import_string.partition(":")
    if not attr_name:
        attr_name = "app"

    module = importlib.import_module(module_path)
    obj = getattr(module, attr_name)

    if callable(obj) and not isinstance(obj, (App, ResourceRouter)):
        try:
            obj = obj()
        except Exception as exc:
            msg = f"Factory function {import_string!r} raised an error: {exc}"
            raise TypeError(msg) from exc

    if not isinstance(obj, (App, ResourceRouter)):
        msg = f"{import_string!r} resolved to {type(obj).__name__}, not a roost App or ResourceRouter"
        raise TypeError(msg)

    return obj


def router_of(obj: App | ResourceRouter) -> ResourceRouter | None:
    """The ResourceRouter behind *obj*, if there is one."""
    if isinstance(obj, ResourceRouter):
        return obj
    plug = obj.plug
    return plug if isinstance(plug, ResourceRouter) else None
