"""Host capability implementations."""

from .files import LocalFileAccess
from .library import InMemoryLibrary

__all__ = [
    "InMemoryLibrary",
    "LocalFileAccess",
]
