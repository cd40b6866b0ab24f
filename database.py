# database.py
import os
import logging
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from dotenv import load_dotenv
from paths import ENV_FILE

logger = logging.getLogger(__name__)

# Load environment variables from .env
load_dotenv(ENV_FILE)

# In-memory SQLite unless overridden; nothing survives a restart
database_url = os.getenv('DATABASE_URL', 'sqlite://')
environment = os.getenv('ENVIRONMENT', 'development')


def create_db_engine(url: str = database_url):
    if url.startswith('sqlite'):
        # One shared connection so every session sees the same in-memory data
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(url)


engine = create_db_engine()

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def seed_demo_data_enabled() -> bool:
    return os.getenv('SEED_DEMO_DATA', 'true').strip().lower() in ('1', 'true', 'yes')


def init_db(bind=engine):
    from Models import Base
    Base.metadata.create_all(bind=bind)
    logger.info("Database initialized at %s (environment: %s)", database_url, environment)


def seed_db():
    from Services.booking_service import RideBookingService
    db = SessionLocal()
    try:
        if RideBookingService(db).seed_demo_data():
            logger.info("Demo data loaded")
    finally:
        db.close()


# Dependency for FastAPI
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
