"""Test utilities for roost applications.

Provides an ASGI test client and a helper for calling plugs directly::

    from roost.testing import TestClient, call_plug
"""

from roost.testing.client import TestClient, TestResponse
from roost.testing.plugs import call_plug, recording_plug

__all__ = [
    "TestClient",
    "TestResponse",
    "call_plug",
    "recording_plug",
]
