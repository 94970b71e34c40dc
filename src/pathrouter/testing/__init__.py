"""Test utilities for pathrouter applications.

::

    from pathrouter.testing import TestClient
"""

from pathrouter.testing.client import TestClient, TestResponse

__all__ = ["TestClient", "TestResponse"]
