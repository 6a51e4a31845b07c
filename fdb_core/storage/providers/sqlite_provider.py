from __future__ import annotations
from typing import List, Optional
import contextlib, os, sqlite3
from fdb_core.constants import TABLE_NAME, DEFAULT_DB_PATH
from fdb_core.errors import StorageError, StoreUninitializedError
from fdb_core.logger import get_logger
from fdb_core.storage.models import Record
from fdb_core.storage.provider import StorageProvider
from fdb_core.utils import fingerprint

log = get_logger("fdb.sqlite")

_COLUMNS = "id, key, cid, owner_public_key"


class SQLiteStorage(StorageProvider):
    """
    Default record store.

    A connection is opened per operation and closed on every exit path.
    Writes run inside ``BEGIN IMMEDIATE`` so the upsert and the read-back
    see one consistent state; uniqueness of (key, owner_public_key) is
    enforced by the table itself.
    """
    name = "sqlite"

    def __init__(self, path=DEFAULT_DB_PATH, timeout: float = 5.0):
        # If no directory, default to current working directory
        dir_path = os.path.dirname(path) or "."
        os.makedirs(dir_path, exist_ok=True)
        self.path = path
        self.timeout = timeout

    @contextlib.contextmanager
    def _connect(self, write: bool = False):
        try:
            conn = sqlite3.connect(self.path, timeout=self.timeout, isolation_level=None)
        except sqlite3.Error as e:
            log.error(f"open failed: {e}")
            raise StorageError(str(e)) from e

        try:
            if write:
                conn.execute("BEGIN IMMEDIATE")
            yield conn
            if conn.in_transaction:
                conn.execute("COMMIT")
        except sqlite3.Error as e:
            if conn.in_transaction:
                conn.rollback()
            log.error(f"statement failed: {e}")
            raise StorageError(str(e)) from e
        except UnicodeEncodeError as e:
            # raised by parameter binding for text sqlite cannot store
            if conn.in_transaction:
                conn.rollback()
            log.error(f"statement failed: {e}")
            raise StorageError(f"Invalid text value: {e.reason}") from e
        except Exception:
            if conn.in_transaction:
                conn.rollback()
            raise
        finally:
            conn.close()

    @staticmethod
    def _require_table(conn: sqlite3.Connection) -> None:
        cur = conn.execute(
            "SELECT 1 FROM sqlite_master WHERE type='table' AND name=?", (TABLE_NAME,)
        )
        if cur.fetchone() is None:
            raise StoreUninitializedError()

    def initialize(self) -> None:
        with self._connect(write=True) as conn:
            conn.execute(f"""CREATE TABLE IF NOT EXISTS {TABLE_NAME}(
                id INTEGER NOT NULL PRIMARY KEY AUTOINCREMENT,
                key TEXT NOT NULL,
                cid TEXT NOT NULL,
                owner_public_key TEXT NOT NULL,
                UNIQUE(key, owner_public_key)
            )""")
        log.info(f"table '{TABLE_NAME}' ready at {self.path}")

    def teardown(self) -> None:
        with self._connect(write=True) as conn:
            conn.execute(f"DROP TABLE IF EXISTS {TABLE_NAME}")
        log.info(f"table '{TABLE_NAME}' dropped at {self.path}")

    def insert_or_update(self, key: str, cid: str, owner_public_key: str) -> Record:
        with self._connect(write=True) as conn:
            self._require_table(conn)
            existed = self._select_pair(conn, key, owner_public_key) is not None
            conn.execute(
                f"INSERT INTO {TABLE_NAME}(key, cid, owner_public_key) VALUES(?,?,?) "
                "ON CONFLICT(key, owner_public_key) DO UPDATE SET cid=excluded.cid",
                (key, cid, owner_public_key),
            )
            rec = self._select_pair(conn, key, owner_public_key)

        log.info(
            f"{'updated' if existed else 'created'} record id={rec.id} "
            f"key={key!r} owner={fingerprint(owner_public_key)}"
        )
        return rec

    def fetch_by_key(self, key: str) -> List[Record]:
        with self._connect() as conn:
            self._require_table(conn)
            cur = conn.execute(
                f"SELECT {_COLUMNS} FROM {TABLE_NAME} WHERE key=? ORDER BY id ASC", (key,)
            )
            records = [Record(*row) for row in cur.fetchall()]
        log.info(f"fetched {len(records)} record(s) for key={key!r}")
        return records

    def fetch_latest_by_key_and_owner(self, key: str, owner_public_key: str) -> Optional[Record]:
        with self._connect() as conn:
            self._require_table(conn)
            return self._select_pair(conn, key, owner_public_key)

    def count(self) -> int:
        with self._connect() as conn:
            self._require_table(conn)
            return conn.execute(f"SELECT COUNT(*) FROM {TABLE_NAME}").fetchone()[0]

    @staticmethod
    def _select_pair(conn: sqlite3.Connection, key: str, owner_public_key: str) -> Optional[Record]:
        cur = conn.execute(
            f"SELECT {_COLUMNS} FROM {TABLE_NAME} WHERE key=? AND owner_public_key=?",
            (key, owner_public_key),
        )
        row = cur.fetchone()
        return Record(*row) if row else None
