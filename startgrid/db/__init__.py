"""
Database module for StartGrid.

Provides SQLite-based persistence for accounts and their grids.
"""

from startgrid.db.schema import init_database, get_connection
from startgrid.db.repository import (
    Account,
    AccountRepository,
    GridRepository,
)

__all__ = [
    "init_database",
    "get_connection",
    "Account",
    "AccountRepository",
    "GridRepository",
]
