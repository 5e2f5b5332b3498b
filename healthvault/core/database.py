from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

DEFAULT_DATABASE_URL = "sqlite:///./healthvault.db"


def normalized_database_url(raw_url: str) -> str:
    """
    DATABASE_URL normalisation:
    - postgres:// or postgresql:// without a driver is rewritten for the psycopg3 dialect.
    - Anything else (SQLite etc.) is left as is.
    """
    if not raw_url:
        return DEFAULT_DATABASE_URL
    raw_url = raw_url.strip()
    # postgres://...  -> postgresql+psycopg://...
    if raw_url.startswith("postgres://"):
        return "postgresql+psycopg://" + raw_url[len("postgres://") :]
    # postgresql://... (no driver) -> postgresql+psycopg://...
    if raw_url.startswith("postgresql://") and "+psycopg" not in raw_url.split("://", 1)[0]:
        return "postgresql+psycopg://" + raw_url[len("postgresql://") :]
    return raw_url


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_db_engine(database_url: str) -> Engine:
    url = normalized_database_url(database_url)
    is_sqlite = url.startswith("sqlite")
    # In-memory SQLite: one shared connection so tables created by init_db are visible to every session
    connect_args = {"check_same_thread": False} if is_sqlite else {}
    use_static_pool = is_sqlite and ":memory:" in url
    engine = create_engine(
        url,
        connect_args=connect_args,
        poolclass=StaticPool if use_static_pool else None,
    )
    if is_sqlite:
        # ON DELETE CASCADE only fires with foreign keys switched on
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def init_db(engine: Engine) -> None:
    # Importing registers the tables on SQLModel.metadata
    from healthvault import models  # noqa: F401

    SQLModel.metadata.create_all(engine)


def session_scope(engine: Engine) -> Session:
    return Session(engine, expire_on_commit=False)
