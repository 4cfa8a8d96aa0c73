"""
Repositories Package - Celebrity Timeline
app/repositories/__init__.py

Data access layer for the celebrity store (SQLite locally, Snowflake in
deployment). Backends are imported lazily by app.core.dependencies so the
Snowflake driver is only needed when that backend is selected.
"""

from app.repositories.base import CelebrityStore

__all__ = [
    "CelebrityStore",
]
