"""
Core Package - Celebrity Timeline
app/core/__init__.py

Core infrastructure: dependencies, exceptions, logging.
Dependencies are imported from app.core.dependencies directly so that
repositories can import the exceptions below without a cycle.
"""

from app.core.exceptions import (
    DatabaseConnectionException,
    DuplicateEntityException,
    EntityNotFoundException,
    InvalidVoteException,
    RepositoryException,
)

__all__ = [
    "DatabaseConnectionException",
    "DuplicateEntityException",
    "EntityNotFoundException",
    "InvalidVoteException",
    "RepositoryException",
]
