"""Repository layer for data access."""

from .filesystem import FilesystemRepository
from .protocol import StateRepositoryProtocol

__all__ = [
    "FilesystemRepository",
    "StateRepositoryProtocol",
]
