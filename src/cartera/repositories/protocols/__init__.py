"""Repository protocols (interfaces)."""

from cartera.repositories.protocols.snapshot_repo import SnapshotRepository

__all__ = [
    "SnapshotRepository",
]
