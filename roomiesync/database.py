import logging

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from .config import settings

logger = logging.getLogger(__name__)

# Configure database engine with appropriate settings
if settings.DATABASE_URL.startswith("sqlite"):
    # SQLite doesn't support connection pooling arguments
    engine = create_engine(
        settings.DATABASE_URL,
        connect_args={"check_same_thread": False},
        echo=settings.DEBUG
    )
else:
    # Configure connection pool for MySQL/PostgreSQL
    engine = create_engine(
        settings.DATABASE_URL,
        pool_pre_ping=True,  # Verify connections before use
        pool_recycle=3600,   # Recycle connections after 1 hour
        pool_size=10,
        max_overflow=20,
        echo=settings.DEBUG
    )

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    """
    Database session dependency for FastAPI.
    Properly manages session lifecycle - creates, yields, and closes.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind=None) -> None:
    """
    Create all tables and seed the example roommates on first run.

    Safe to call repeatedly: seeding only happens while the roommates
    table is empty.
    """
    from .models import Base, Roommate
    from .seed import INITIAL_ROOMMATES

    bind = bind or engine
    Base.metadata.create_all(bind=bind)

    Session = sessionmaker(autocommit=False, autoflush=False, bind=bind)
    db = Session()
    try:
        if db.query(Roommate).count() == 0:
            for roommate in INITIAL_ROOMMATES:
                db.add(Roommate(**roommate.model_dump()))
            db.commit()
            logger.info("Seeded %d example roommates", len(INITIAL_ROOMMATES))
    finally:
        db.close()
