from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass

import mysql.connector
from mysql.connector import errors, pooling

from ..core.constants import DEFAULT_DB_TIMEOUT_SECONDS
from ..core.exceptions import RepositoryError

logger = logging.getLogger(__name__)

_POOL_RETRY_SECONDS = 0.05


@dataclass
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str
    pool_size: int = 5
    timeout_seconds: int = DEFAULT_DB_TIMEOUT_SECONDS


class DatabaseConnection:
    """Connection factory backed by a mysql-connector pool.

    Owned by the application container; repositories borrow one connection
    per operation through ``db_cursor`` and hand it back on close.
    """

    def __init__(self, config: DBConfig):
        self._config = config
        self._pool: pooling.MySQLConnectionPool | None = None
        self._pool_lock = threading.Lock()

    @property
    def timeout_seconds(self) -> int:
        return int(self._config.timeout_seconds)

    def _get_pool(self) -> pooling.MySQLConnectionPool:
        with self._pool_lock:
            if self._pool is None:
                self._pool = pooling.MySQLConnectionPool(
                    pool_name=f"field_tracker_{self._config.database}",
                    pool_size=int(self._config.pool_size),
                    host=self._config.host,
                    port=int(self._config.port),
                    user=self._config.user,
                    password=self._config.password,
                    database=self._config.database,
                    connection_timeout=self.timeout_seconds,
                )
            return self._pool

    def _borrow(self):
        """Wait up to ``timeout_seconds`` for a free pooled connection.

        The driver's pool does not block when exhausted, so poll it.
        """

        pool = self._get_pool()
        deadline = time.monotonic() + self.timeout_seconds
        while True:
            try:
                return pool.get_connection()
            except errors.PoolError as e:
                if time.monotonic() >= deadline:
                    logger.error("Timed out waiting for a pooled connection: %s", e)
                    raise RepositoryError("Database connection wait timed out") from e
            time.sleep(_POOL_RETRY_SECONDS)

    def connect(self):
        try:
            conn = self._borrow()
        except RepositoryError:
            raise
        except mysql.connector.Error as e:
            logger.error("Could not acquire database connection: %s", e)
            raise RepositoryError("Database unavailable") from e

        # Bound statement and lock waits so a request never blocks indefinitely.
        try:
            cur = conn.cursor()
            try:
                cur.execute("SET SESSION max_execution_time=%s", (self.timeout_seconds * 1000,))
                cur.execute("SET SESSION innodb_lock_wait_timeout=%s", (self.timeout_seconds,))
            finally:
                cur.close()
        except mysql.connector.Error as e:
            conn.close()
            raise RepositoryError("Database unavailable") from e
        return conn
