from pathlib import Path

from sqlalchemy import Engine, event
from sqlmodel import Session, SQLModel, create_engine

from jobcost.core.config import settings
from jobcost.core.observability import get_logger
from jobcost.core.seed import seed_demo_data
from jobcost.models import Meta

logger = get_logger(__name__)

SEEDED_KEY = "seeded"


def _sqlite_pragmas(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    if settings.SQLITE_WAL:
        cursor.execute("PRAGMA journal_mode=WAL")
    cursor.close()


def make_engine(url: str, **engine_kwargs) -> Engine:
    """Create an engine; SQLite connections get foreign keys enforced."""
    if url.startswith("sqlite"):
        engine_kwargs.setdefault("connect_args", {"check_same_thread": False})
    new_engine = create_engine(url, **engine_kwargs)
    if new_engine.dialect.name == "sqlite":
        event.listen(new_engine, "connect", _sqlite_pragmas)
    return new_engine


engine = make_engine(settings.SQLALCHEMY_DATABASE_URI)


# make sure all SQLModel models are imported (jobcost.models) before
# initializing DB, otherwise relationships are not configured


def create_db_and_tables(target: Engine | None = None) -> None:
    bind = target or engine
    database = bind.url.database
    if bind.dialect.name == "sqlite" and database and database != ":memory:":
        Path(database).parent.mkdir(parents=True, exist_ok=True)
    SQLModel.metadata.create_all(bind)


def is_seeded(session: Session) -> bool:
    return session.get(Meta, SEEDED_KEY) is not None


def init_db(session: Session, seed: bool | None = None) -> None:
    """Insert the demo data once, guarded by the meta seed flag."""
    if seed is None:
        seed = settings.SEED_ON_STARTUP
    if not seed:
        return

    if is_seeded(session):
        logger.debug("Seed data already present")
        return

    seed_demo_data(session)
    session.add(Meta(key=SEEDED_KEY, value="true"))
    session.commit()
    logger.info("Seed data inserted")
