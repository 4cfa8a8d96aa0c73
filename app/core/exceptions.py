"""
Custom Exceptions - Celebrity Timeline
app/core/exceptions.py

Custom exception classes for store and vote operations.
"""


class RepositoryException(Exception):
    """Base exception for repository operations."""

    pass


class EntityNotFoundException(RepositoryException):
    """Entity not found in database."""

    def __init__(self, entity_type: str, entity_id: str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with ID {entity_id} not found")


class DuplicateEntityException(RepositoryException):
    """Duplicate entity violation."""

    def __init__(self, message: str = "Entity already exists"):
        self.message = message
        super().__init__(message)


class DatabaseConnectionException(RepositoryException):
    """Database connection failure."""

    def __init__(self, message: str = "Database connection failed"):
        self.message = message
        super().__init__(message)


class InvalidVoteException(Exception):
    """Vote value is non-numeric or outside the accepted range."""

    def __init__(self, value, message: str = "Vote must be a number between 0 and 100"):
        self.value = value
        self.message = message
        super().__init__(f"{message} (got {value!r})")
