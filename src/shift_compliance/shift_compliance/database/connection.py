from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Optional

from mysql.connector import pooling

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str
    pool_size: int = 5

    @classmethod
    def from_dict(cls, db_config: dict) -> "DBConfig":
        return cls(
            host=str(db_config.get("host", "localhost")),
            port=int(db_config.get("port", 3306)),
            user=str(db_config.get("user", "root")),
            password=str(db_config.get("password", "")),
            database=str(db_config.get("database", "attendance_db")),
            pool_size=int(db_config.get("pool_size", 5)),
        )

    def connect_kwargs(self, *, with_database: bool = True) -> dict:
        kwargs = dict(host=self.host, port=self.port, user=self.user, password=self.password)
        if with_database:
            kwargs["database"] = self.database
        return kwargs


class DatabaseConnection:
    """Process-wide pooled connection factory.

    Check-in requests from many employees arrive concurrently, so connections
    come from a mysql-connector pool; sessions run in UTC so DATETIME values
    round-trip as naive UTC.
    """

    _instance: Optional["DatabaseConnection"] = None
    _instance_lock = threading.Lock()

    def __init__(self, config: DBConfig):
        self._config = config
        self._pool = pooling.MySQLConnectionPool(
            pool_name="shift_compliance",
            pool_size=config.pool_size,
            pool_reset_session=True,
            time_zone="+00:00",
            **config.connect_kwargs(),
        )

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        with cls._instance_lock:
            if cls._instance is None:
                cls._instance = DatabaseConnection(config)
                logger.info(
                    "MySQL pool ready: %s@%s:%s/%s (size=%d)",
                    config.user,
                    config.host,
                    config.port,
                    config.database,
                    config.pool_size,
                )
            return cls._instance

    def connect(self):
        # Returned connections go back to the pool on close().
        return self._pool.get_connection()
