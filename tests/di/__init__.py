"""Test containers and mock providers.

Importing this package registers the mock implementations as subclasses
of their components.
"""

from .persistence import MockPersistenceProvider
from .container import build_test_container

__all__ = ["MockPersistenceProvider", "build_test_container"]
