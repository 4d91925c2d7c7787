from typing import Any, Dict

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from feedback_core.app.config import settings

engine_args: Dict[str, Any] = {"pool_pre_ping": True}
if settings.DATABASE_URL.startswith("sqlite"):
    engine_args["connect_args"] = {"check_same_thread": False}
    # A single shared connection keeps in-memory databases alive across sessions
    if settings.DATABASE_URL in ("sqlite://", "sqlite:///:memory:"):
        engine_args["poolclass"] = StaticPool
else:
    engine_args["pool_size"] = settings.DB_SESSION_POOL_SIZE
    engine_args["max_overflow"] = settings.DB_SESSION_POOL_MAX_OVERFLOW_SIZE

engine = create_engine(settings.DATABASE_URL, **engine_args)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
