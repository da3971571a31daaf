from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from bandwidth_billing.config import settings

engine = create_engine(settings.database_url, echo=settings.sql_echo, pool_pre_ping=True)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """FastAPI dependency: one session per request, always closed"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
