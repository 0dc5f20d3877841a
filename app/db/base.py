from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import settings


def _engine_args(url: str) -> dict:
    if not url.startswith('sqlite'):
        return {'pool_pre_ping': True}
    args = {'connect_args': {'check_same_thread': False}}
    # In-memory databases live on a single connection
    if url in ('sqlite://', 'sqlite:///:memory:'):
        args['poolclass'] = StaticPool
    return args


engine = create_engine(settings.DATABASE_URL, **_engine_args(settings.DATABASE_URL))
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
