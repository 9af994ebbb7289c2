"""Repository layer - snapshot access abstractions and implementations."""

from cartera.repositories.protocols import SnapshotRepository

__all__ = [
    "SnapshotRepository",
]
