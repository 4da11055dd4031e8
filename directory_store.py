# ==========================================================
# 🗄️ directory_store.py
# The mothership's long-term memory: topic bytes -> owner bytes.
# One SQLite file, one table, one lock. Survives restarts.
# ==========================================================
import sqlite3
import threading
from pathlib import Path
from typing import Optional

from loguru import logger


class StoreError(Exception):
    """💥 Base class for anything that goes wrong down in the storage basement."""


class StoreOpenError(StoreError):
    """🚪 Could not open the store at all. Fatal at startup."""


class StoreWriteError(StoreError):
    """✍️ A put did not make it to disk. Treat the write as never having happened."""


class StoreReadError(StoreError):
    """📖 A get blew up. Not the same thing as "not found"."""


class DirectoryStore:
    """
    🗄️ Durable, ordered key-value store keyed by raw topic bytes.

    A single handle is shared by every request thread, so all statements
    go through one lock. SQLite keeps the keys in a B-tree, which gives us
    ordering for free. Commits are fsynced (synchronous=FULL) before
    ``put`` returns.
    """

    def __init__(self, db_path: Path):
        """
        🏗️ Opens (or creates) the store file.

        Args:
            db_path (Path): Where the SQLite file lives.

        Raises:
            StoreOpenError: If the file or schema can't be set up.
        """
        self.db_path = Path(db_path)
        self._lock = threading.Lock()
        self._conn = None

        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            # isolation_level=None: we drive BEGIN/COMMIT ourselves.
            self._conn = sqlite3.connect(
                self.db_path, check_same_thread=False, isolation_level=None
            )
            self._conn.execute("PRAGMA journal_mode=WAL")
            self._conn.execute("PRAGMA synchronous=FULL")
            self._conn.execute(
                "CREATE TABLE IF NOT EXISTS directory ("
                " key BLOB PRIMARY KEY,"
                " value BLOB NOT NULL"
                ")"
            )
        except (sqlite3.Error, OSError) as e:
            if self._conn is not None:
                self._conn.close()
            raise StoreOpenError(f"unable to open directory store at {self.db_path}: {e}") from e

        logger.debug("directory store opened at {}", self.db_path)

    def put(self, key: bytes, value: bytes) -> Optional[bytes]:
        """
        💾 Writes ``value`` under ``key``, stomping on whatever was there.

        Read-old and write-new happen in one transaction, so the returned
        previous value is exactly the one this write replaced.

        Returns:
            Optional[bytes]: The overwritten value, or None on first write.

        Raises:
            StoreWriteError: On any storage failure. Nothing was written.
        """
        with self._lock:
            try:
                self._conn.execute("BEGIN IMMEDIATE")
                try:
                    row = self._conn.execute(
                        "SELECT value FROM directory WHERE key = ?", (key,)
                    ).fetchone()
                    self._conn.execute(
                        "INSERT OR REPLACE INTO directory (key, value) VALUES (?, ?)",
                        (key, value),
                    )
                    self._conn.execute("COMMIT")
                except sqlite3.Error:
                    self._conn.execute("ROLLBACK")
                    raise
            except sqlite3.Error as e:
                raise StoreWriteError(str(e)) from e

        return bytes(row[0]) if row is not None else None

    def get(self, key: bytes) -> Optional[bytes]:
        """
        🔍 Fetches the current value for ``key``, fresh from disk.

        Returns:
            Optional[bytes]: The stored value, or None if never written.

        Raises:
            StoreReadError: On any storage failure.
        """
        with self._lock:
            try:
                row = self._conn.execute(
                    "SELECT value FROM directory WHERE key = ?", (key,)
                ).fetchone()
            except sqlite3.Error as e:
                raise StoreReadError(str(e)) from e

        return bytes(row[0]) if row is not None else None

    def count(self) -> int:
        """🧮 How many topics are on the books."""
        with self._lock:
            try:
                (total,) = self._conn.execute("SELECT COUNT(*) FROM directory").fetchone()
            except sqlite3.Error as e:
                raise StoreReadError(str(e)) from e
        return total

    def close(self):
        """🔒 Lights out."""
        with self._lock:
            self._conn.close()
        logger.debug("directory store closed at {}", self.db_path)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
