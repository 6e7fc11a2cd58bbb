"""Database package for Provider Management Service."""

from .entity_database import EntityDatabase
from .in_memory_database import InMemoryDatabase

__all__ = ["EntityDatabase", "InMemoryDatabase"]
