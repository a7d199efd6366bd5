# app/db/engine.py

from functools import lru_cache

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine

from app.config import get_settings


@lru_cache
def get_engine() -> Engine:
    # One engine (and connection pool) per process; set SQL_ECHO=true to see SQL
    settings = get_settings()
    return create_engine(settings.database_url, echo=settings.sql_echo, future=True)
