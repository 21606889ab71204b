"""Database setup for Life Story using SQLModel."""

from sqlmodel import SQLModel, Session, create_engine
from lifestory.core.config import get_settings
import lifestory.models.records  # noqa: F401 registers table models

settings = get_settings()

# Create engine
engine = create_engine(
    settings.database_url,
    echo=settings.debug,
    # Needed for SQLite
    connect_args={"check_same_thread": False}
    if settings.database_url.startswith("sqlite")
    else {},
)


def create_db_and_tables():
    """Create all database tables."""
    SQLModel.metadata.create_all(engine)


def get_session():
    """Dependency that provides a database session."""
    with Session(engine) as session:
        yield session
