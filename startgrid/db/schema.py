"""
SQLite schema definition and initialization for StartGrid.

This module defines the database schema for persisting:
- Accounts (profile fields and the account's grid)
"""

import sqlite3
from pathlib import Path
from typing import Optional

# SQL schema definition
SCHEMA_SQL = """
-- One row per account; the grid is stored whole and replaced on every save
CREATE TABLE IF NOT EXISTS accounts (
    id TEXT PRIMARY KEY,
    name TEXT,
    email TEXT,
    picture TEXT,
    grid_json TEXT,                         -- JSON: {col, row, cells}; NULL until first save
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);
"""


def init_database(db_path: Path, account_id: Optional[str] = None) -> sqlite3.Connection:
    """
    Initialize SQLite database with schema.

    Creates the database file if it doesn't exist and applies the schema.
    Uses WAL mode for better concurrent read performance.

    Args:
        db_path: Path to the SQLite database file
        account_id: Account to create if missing

    Returns:
        sqlite3.Connection: Database connection
    """
    db_path = Path(db_path)

    # Ensure parent directory exists
    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(str(db_path))
    conn.row_factory = sqlite3.Row

    conn.execute("PRAGMA journal_mode=WAL")

    conn.executescript(SCHEMA_SQL)
    if account_id:
        conn.execute("INSERT OR IGNORE INTO accounts (id) VALUES (?)", (account_id,))
    conn.commit()

    return conn


def get_connection(db_path: Path) -> sqlite3.Connection:
    """
    Get a database connection.

    Args:
        db_path: Path to the SQLite database file

    Returns:
        sqlite3.Connection: Database connection with row factory set
    """
    conn = sqlite3.connect(str(db_path))
    conn.row_factory = sqlite3.Row
    return conn
