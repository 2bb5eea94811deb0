"""Test utilities for tern applications.

    from tern.testing import TestClient
"""

from tern.testing.client import StreamResult, TestClient

__all__ = [
    "StreamResult",
    "TestClient",
]
