"""Request log - records which endpoint was called and when.

Backed by a single sqlite3 file. Writing to it is never on the critical
path of a response: callers log and move on when it fails.
"""

from datetime import datetime, timezone
from pathlib import Path
import sqlite3


class RequestLog:
    """Append-only log of served endpoints with per-endpoint counts."""

    def __init__(self, db_path: Path | str = "usage.db"):
        self.db_path = str(db_path)
        self._connection = sqlite3.connect(self.db_path, check_same_thread=False)
        self._connection.execute(
            """
            CREATE TABLE IF NOT EXISTS requests (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                endpoint TEXT NOT NULL,
                timestamp TEXT NOT NULL
            )
            """
        )
        self._connection.commit()

    def record(self, endpoint: str, timestamp: datetime | None = None) -> None:
        """Store one call of ``endpoint``."""
        moment = timestamp or datetime.now(timezone.utc)
        self._connection.execute(
            "INSERT INTO requests (endpoint, timestamp) VALUES (?, ?)",
            (endpoint, moment.isoformat()),
        )
        self._connection.commit()

    def counts(self) -> dict[str, int]:
        """Number of recorded calls per endpoint."""
        cursor = self._connection.execute(
            "SELECT endpoint, COUNT(*) FROM requests GROUP BY endpoint ORDER BY endpoint"
        )
        return {endpoint: count for endpoint, count in cursor.fetchall()}

    def total(self) -> int:
        cursor = self._connection.execute("SELECT COUNT(*) FROM requests")
        return cursor.fetchone()[0]

    def close(self) -> None:
        self._connection.close()
