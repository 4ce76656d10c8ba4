from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Optional

from mysql.connector import pooling


@dataclass
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str
    pool_name: str = "candi_qr"
    pool_size: int = 5


class DatabaseConnection:
    """Owns the MySQL connection pool for one process.

    Built once by the container at startup and disposed at shutdown. The pool
    itself is created on first use so that constructing the app never needs a
    reachable database.
    """

    def __init__(self, config: DBConfig):
        self._config = config
        self._pool: Optional[pooling.MySQLConnectionPool] = None
        self._lock = threading.Lock()

    @property
    def config(self) -> DBConfig:
        return self._config

    def _get_pool(self) -> pooling.MySQLConnectionPool:
        with self._lock:
            if self._pool is None:
                self._pool = pooling.MySQLConnectionPool(
                    pool_name=self._config.pool_name,
                    pool_size=int(self._config.pool_size),
                    pool_reset_session=True,
                    host=self._config.host,
                    port=int(self._config.port),
                    user=self._config.user,
                    password=self._config.password,
                    database=self._config.database,
                )
            return self._pool

    def connect(self):
        """Borrow a pooled connection; close() hands it back to the pool."""
        return self._get_pool().get_connection()

    def dispose(self) -> None:
        with self._lock:
            if self._pool is not None:
                # MySQLConnectionPool has no public close-all. _remove_connections
                # is what mysql-connector itself calls to drain the idle queue;
                # connections still borrowed are dropped with the old pool.
                self._pool._remove_connections()
                self._pool = None
