# backend/collabx/db.py

from contextlib import contextmanager
from pathlib import Path
from typing import Generator, Optional

from collabx.core.settings import settings
from sqlalchemy import create_engine
from sqlalchemy.engine import URL, make_url
from sqlalchemy.orm import Session, declarative_base, sessionmaker

BACKEND_DIR = Path(__file__).resolve().parents[1]
DEFAULT_SQLITE_FILE = "collabx.db"


def resolve_db_url(raw_url: str) -> tuple[URL, Optional[Path]]:
    """
    Pin relative sqlite paths to the backend directory so the app, the
    scripts and alembic all open the same file whatever the working directory.
    """
    url = make_url(raw_url)
    if not url.drivername.startswith("sqlite"):
        return url, None
    if url.database in (None, "", ":memory:"):
        if url.database == ":memory:":
            return url, None
        url = url.set(database=DEFAULT_SQLITE_FILE)

    path = Path(url.database)
    if not path.is_absolute():
        path = (BACKEND_DIR / path).resolve()
    return url.set(database=str(path)), path


_url, SQLITE_PATH = resolve_db_url(settings.db_url)
# render_as_string(hide_password=False): str(url) masks the password
DB_URL = _url.render_as_string(hide_password=False)

connect_args: dict = {}
if SQLITE_PATH is not None:
    # Concurrent writers wait up to 30s for the file lock
    connect_args = {"check_same_thread": False, "timeout": 30}

engine = create_engine(DB_URL, echo=False, future=True, connect_args=connect_args)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
Base = declarative_base()


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def session_scope() -> Generator[Session, None, None]:
    """Session for scripts and background jobs: commit on success, roll back on error.

    Usage:
        with session_scope() as db:
            db.add(models.Faculty(...))
    """
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def get_db_path() -> Optional[str]:
    """Resolved sqlite file path, or None for other databases."""
    return str(SQLITE_PATH) if SQLITE_PATH is not None else None
