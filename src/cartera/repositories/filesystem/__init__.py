"""Filesystem (JSON snapshot) repository implementations."""

from cartera.repositories.filesystem.snapshot_repo import JsonSnapshotRepository

__all__ = [
    "JsonSnapshotRepository",
]
