"""
database wiring: engine, sqlite connection setup and request sessions

every sqlite connection gets the configured pragmas plus a `fold()` sql
function (python str.casefold) so text search is case-insensitive for
cyrillic as well as latin text.
"""
import logging
import os
import sqlite3
from typing import Optional

from alembic import command
from alembic.config import Config
from sqlalchemy import event, inspect
from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, create_engine

from historyaddress.core.config import settings

logger = logging.getLogger(__name__)


def _fold(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return str(value).casefold()


def _on_connect(dbapi_connection, connection_record) -> None:
    if not isinstance(dbapi_connection, sqlite3.Connection):
        return
    dbapi_connection.create_function("fold", 1, _fold, deterministic=True)
    cursor = dbapi_connection.cursor()
    try:
        cursor.execute(f"PRAGMA busy_timeout = {int(settings.SQLITE_BUSY_TIMEOUT_MS)}")
        cursor.execute(f"PRAGMA journal_mode = {settings.SQLITE_JOURNAL_MODE}")
        cursor.execute(f"PRAGMA synchronous = {settings.SQLITE_SYNCHRONOUS}")
        cursor.execute(f"PRAGMA cache_size = {int(settings.SQLITE_CACHE_SIZE)}")
        cursor.execute("PRAGMA temp_store = MEMORY")
    finally:
        cursor.close()


def configure_engine(target: Engine) -> Engine:
    """attach the sqlite connection hook, safe to call on any engine"""
    if not event.contains(target, "connect", _on_connect):
        event.listen(target, "connect", _on_connect)
    return target


def _connect_args(url: str) -> dict:
    if url.startswith("sqlite"):
        # fastapi runs sync endpoints in a threadpool
        return {"check_same_thread": False}
    return {}


engine = configure_engine(
    create_engine(settings.DATABASE_URL, connect_args=_connect_args(settings.DATABASE_URL))
)


FIRST_REVISION = "0001_initial"


def alembic_config(connection=None) -> Config:
    config = Config()
    config.set_main_option("script_location", settings.MIGRATIONS_DIR)
    if connection is not None:
        config.attributes["connection"] = connection
    return config


def run_migrations(connection) -> None:
    """bring the schema to head, adopting stores built before alembic tracked them"""
    config = alembic_config(connection)
    inspector = inspect(connection)
    tables = set(inspector.get_table_names())
    if "homes" in tables and "alembic_version" not in tables:
        columns = {c["name"] for c in inspector.get_columns("homes")}
        base = "head" if "birth_date" in columns else FIRST_REVISION
        logger.info(f"untracked homes table found, stamping {base}")
        command.stamp(config, base)
    command.upgrade(config, "head")


def init_db(target: Optional[Engine] = None) -> None:
    # importing models registers the tables on SQLModel.metadata
    from historyaddress import models  # noqa: F401

    target = target or engine
    if os.path.isdir(settings.MIGRATIONS_DIR):
        with target.begin() as connection:
            run_migrations(connection)
    else:
        logger.warning(f"no migrations at {settings.MIGRATIONS_DIR}, creating tables without version tracking")
    SQLModel.metadata.create_all(target)
    logger.info("database tables ready")


def get_session():
    with Session(engine) as session:
        yield session
