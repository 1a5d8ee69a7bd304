"""
Repository classes for database CRUD operations.

This module provides repository pattern implementations for:
- Accounts (profile rows)
- Grids (each account's persisted layout)
"""

import json
import logging
import sqlite3
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from startgrid.db.schema import get_connection
from startgrid.layouts.cells import Grid

logger = logging.getLogger(__name__)


@dataclass
class Account:
    """Account entity owning one grid."""

    id: str
    name: Optional[str]
    email: Optional[str]
    picture: Optional[str]
    has_grid: bool
    created_at: datetime
    updated_at: datetime


class AccountRepository:
    """CRUD operations for accounts."""

    def __init__(self, db_path: Path):
        self.db_path = Path(db_path)

    def _get_conn(self) -> sqlite3.Connection:
        return get_connection(self.db_path)

    def ensure(
        self,
        account_id: str,
        name: Optional[str] = None,
        email: Optional[str] = None,
        picture: Optional[str] = None,
    ) -> Account:
        """Create the account if missing and return it."""
        with self._get_conn() as conn:
            conn.execute(
                "INSERT OR IGNORE INTO accounts (id, name, email, picture) VALUES (?, ?, ?, ?)",
                (account_id, name, email, picture),
            )
            conn.commit()

        return self.get_by_id(account_id)

    def get_by_id(self, account_id: str) -> Optional[Account]:
        with self._get_conn() as conn:
            row = conn.execute(
                "SELECT * FROM accounts WHERE id = ?", (account_id,)
            ).fetchone()

        if row is None:
            return None

        return self._row_to_account(row)

    def get_all(self) -> List[Account]:
        with self._get_conn() as conn:
            rows = conn.execute("SELECT * FROM accounts ORDER BY created_at").fetchall()

        return [self._row_to_account(row) for row in rows]

    def _row_to_account(self, row: sqlite3.Row) -> Account:
        return Account(
            id=row["id"],
            name=row["name"],
            email=row["email"],
            picture=row["picture"],
            has_grid=row["grid_json"] is not None,
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )


class GridRepository:
    """Load and replace an account's grid."""

    def __init__(self, db_path: Path, default_col: int = 10, default_row: int = 5):
        self.db_path = Path(db_path)
        self.default_col = default_col
        self.default_row = default_row

    def _get_conn(self) -> sqlite3.Connection:
        return get_connection(self.db_path)

    def default_grid(self) -> Grid:
        return Grid(col=self.default_col, row=self.default_row, cells=[])

    def get(self, account_id: str) -> Grid:
        """
        Get the account's grid.

        Unknown accounts, accounts that never saved and unreadable rows all
        get the default empty grid.
        """
        with self._get_conn() as conn:
            row = conn.execute(
                "SELECT grid_json FROM accounts WHERE id = ?", (account_id,)
            ).fetchone()

        if row is None or row["grid_json"] is None:
            return self.default_grid()

        try:
            data = json.loads(row["grid_json"])
        except ValueError as e:
            logger.warning("Stored grid of account %s is not valid JSON: %s", account_id, e)
            return self.default_grid()

        if not isinstance(data, dict):
            return self.default_grid()

        return Grid.from_dict(data, self.default_col, self.default_row)

    def replace(self, account_id: str, grid: Grid) -> None:
        """Store the grid as a whole, creating the account if needed."""
        grid_json = json.dumps(grid.to_dict())

        with self._get_conn() as conn:
            conn.execute(
                """
                INSERT INTO accounts (id, grid_json) VALUES (?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    grid_json = excluded.grid_json,
                    updated_at = CURRENT_TIMESTAMP
                """,
                (account_id, grid_json),
            )
            conn.commit()

        logger.debug("Stored grid of account %s (%d cells)", account_id, len(grid.cells))
