from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import mysql.connector
from mysql.connector import pooling
from mysql.connector.constants import ClientFlag
from mysql.connector.errors import PoolError

from ..core.constants import DEFAULT_POOL_SIZE

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str

    @classmethod
    def from_dict(cls, db_config: dict) -> "DBConfig":
        return cls(
            host=str(db_config.get("host", "localhost")),
            port=int(db_config.get("port", 3306)),
            user=str(db_config.get("user", "root")),
            password=str(db_config.get("password", "")),
            database=str(db_config.get("database", "smart_attendance")),
        )


class DatabaseConnection:
    """Process-wide connection pool handle.

    Opened once by the app factory and closed at interpreter exit. Repositories
    receive this handle and borrow one pooled connection per operation. When
    every pooled connection is borrowed, ``connect()`` opens a one-off
    connection instead of failing the request.
    """

    def __init__(self, config: DBConfig, *, pool_size: int = DEFAULT_POOL_SIZE, pool_name: str = "smart_attendance"):
        self._config = config
        self._pool_size = int(pool_size)
        self._pool_name = pool_name
        self._pool: Optional[pooling.MySQLConnectionPool] = None

    def _connect_args(self) -> dict:
        return {
            "host": self._config.host,
            "port": int(self._config.port),
            "user": self._config.user,
            "password": self._config.password,
            "database": self._config.database,
            # rowcount must tell an unchanged upsert (0) from an insert (1).
            "client_flags": [-ClientFlag.FOUND_ROWS],
        }

    def open(self) -> "DatabaseConnection":
        if self._pool is None:
            self._pool = pooling.MySQLConnectionPool(
                pool_name=self._pool_name,
                pool_size=self._pool_size,
                **self._connect_args(),
            )
            logger.info(
                "Connection pool opened (%s@%s:%s/%s, size=%s)",
                self._config.user,
                self._config.host,
                self._config.port,
                self._config.database,
                self._pool_size,
            )
        return self

    def close(self) -> None:
        if self._pool is None:
            return
        # Idle connections sit in the pool's queue; borrowed ones close on return.
        remove = getattr(self._pool, "_remove_connections", None)
        if callable(remove):
            remove()
        else:
            logger.warning("Connection pool has no drain hook; idle connections close on exit")
        self._pool = None
        logger.info("Connection pool closed")

    def connect(self):
        if self._pool is None:
            raise RuntimeError("Database connection pool is not open")
        try:
            return self._pool.get_connection()
        except PoolError:
            logger.warning("Connection pool exhausted (size=%s); opening a direct connection", self._pool_size)
            return mysql.connector.connect(**self._connect_args())
