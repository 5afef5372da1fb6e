"""Database connection and initialization."""

from sqlmodel import SQLModel, Session, create_engine

from photoshare.config import settings

# Import all models so SQLModel registers them
import photoshare.models  # noqa: F401

_is_sqlite = settings.sqlalchemy_url.startswith("sqlite")

engine = create_engine(
    settings.sqlalchemy_url,
    echo=settings.debug,
    connect_args={"check_same_thread": False} if _is_sqlite else {},
)


def init_db() -> None:
    """Create all tables; on SQLite also enable WAL journaling."""
    SQLModel.metadata.create_all(engine)

    if _is_sqlite:
        with engine.connect() as conn:
            conn.exec_driver_sql("PRAGMA journal_mode=WAL")
            conn.exec_driver_sql("PRAGMA synchronous=NORMAL")
            conn.commit()


def get_session():
    """FastAPI dependency: yields a database session."""
    with Session(engine) as session:
        yield session
