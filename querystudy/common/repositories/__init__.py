"""
Repositories Package
"""

from .base_repository import (
    BaseRepository,
    DuplicateEntity,
    EntityNotFound,
    RepositoryError,
    RepositoryException,
)

__all__ = [
    "BaseRepository",
    "RepositoryException",
    "EntityNotFound",
    "DuplicateEntity",
    "RepositoryError",
]
