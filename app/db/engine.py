# app/db/engine.py

import os

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine

DEFAULT_DB_URL = "sqlite:///db.sqlite"  # file in project root


def get_db_url() -> str:
    return os.getenv("DATABASE_URL", DEFAULT_DB_URL)


def _enable_sqlite_transactions(engine: Engine) -> None:
    # pysqlite manages BEGIN on its own and breaks SAVEPOINT; let SQLAlchemy
    # emit it instead, and turn on foreign key enforcement per connection.
    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys = ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")


def get_engine() -> Engine:
    # echo=True if you want to see SQL printed in the terminal
    engine = create_engine(get_db_url(), future=True)
    if engine.dialect.name == "sqlite":
        _enable_sqlite_transactions(engine)
    return engine
