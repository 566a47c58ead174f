from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import mysql.connector

from ..metrics.sink import MetricsSink, NullMetrics

logger = logging.getLogger(__name__)


@dataclass
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str
    connect_timeout: int = 10

    @classmethod
    def from_dict(cls, db_config: dict) -> "DBConfig":
        return cls(
            host=str(db_config["host"]),
            port=int(db_config.get("port", 3306)),
            user=str(db_config["user"]),
            password=str(db_config["password"]),
            database=str(db_config["database"]),
            connect_timeout=int(db_config.get("connect_timeout", 10)),
        )


class DatabaseConnection:
    """DB connection factory.

    Note: We create short-lived connections per operation; the metrics sink
    receives timings of every named unit of work.
    """

    def __init__(self, config: DBConfig, *, metrics: Optional[MetricsSink] = None):
        self._config = config
        self.metrics: MetricsSink = metrics or NullMetrics()

    @property
    def config(self) -> DBConfig:
        return self._config

    def connect(self):
        return mysql.connector.connect(
            host=self._config.host,
            port=int(self._config.port),
            user=self._config.user,
            password=self._config.password,
            database=self._config.database,
            connection_timeout=int(self._config.connect_timeout),
        )

    def ping(self) -> bool:
        """True when the database answers a trivial query."""
        try:
            conn = self.connect()
        except mysql.connector.Error as e:
            logger.error("Database connection test failed: %s", e)
            return False
        try:
            cur = conn.cursor()
            try:
                cur.execute("SELECT 1")
                cur.fetchall()
            finally:
                cur.close()
            return True
        except mysql.connector.Error as e:
            logger.error("Database connection test failed: %s", e)
            return False
        finally:
            conn.close()
