"""Enums for project options."""

from enum import Enum


class DBDriver(str, Enum):
    """Supported database drivers."""

    GO_LIBSQL = "go-libsql"
    SQLITE3 = "sqlite3"
    POSTGRES = "postgres"

    @property
    def label(self) -> str:
        labels: dict[DBDriver, str] = {
            DBDriver.GO_LIBSQL: "LibSQL (go-libsql)",
            DBDriver.SQLITE3: "SQLite (mattn/go-sqlite3)",
            DBDriver.POSTGRES: "PostgreSQL (pgx)",
        }
        return labels[self]

    @property
    def description(self) -> str:
        descriptions: dict[DBDriver, str] = {
            DBDriver.GO_LIBSQL: "Embedded SQLite-compatible database with optional Turso sync.",
            DBDriver.SQLITE3: "Classic embedded SQLite through cgo.",
            DBDriver.POSTGRES: "Client/server PostgreSQL through the pgx stdlib driver.",
        }
        return descriptions[self]
