# database.py
"""
SQLAlchemy database connection and session management.

This module provides:
- Engine construction for the configured DATABASE_URL
- Session factory construction (held by the app, not a module global)
- A FastAPI dependency that yields one session per request

Usage:
     from database import get_session

     # In FastAPI routes:
     @router.get("/items")
     def get_items(db: Session = Depends(get_session)):
          return db.query(Item).all()
"""
import logging
from typing import Generator, Optional

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

import config

logger = logging.getLogger(__name__)


def build_engine(url: Optional[str] = None, echo: Optional[bool] = None) -> Engine:
     """
     Create a SQLAlchemy engine.

     SQLite URLs get a thread-tolerant connection (and a single shared
     connection for in-memory databases); server databases get a pool.
     """
     url = url or config.DATABASE_URL
     echo = config.SQL_ECHO if echo is None else echo

     if url.startswith("sqlite"):
          kwargs = {"connect_args": {"check_same_thread": False}}
          if ":memory:" in url or url in ("sqlite://", "sqlite+pysqlite://"):
               kwargs["poolclass"] = StaticPool
          return create_engine(url, echo=echo, **kwargs)

     return create_engine(
          url,
          pool_size=config.DB_POOL_SIZE,
          max_overflow=config.DB_MAX_OVERFLOW,
          pool_timeout=30,
          pool_recycle=1800,  # Recycle connections after 30 minutes
          pool_pre_ping=True,
          echo=echo,
     )


def build_session_factory(engine: Engine) -> sessionmaker:
     """Session factory bound to the given engine."""
     return sessionmaker(
          bind=engine,
          autocommit=False,
          autoflush=False,
          expire_on_commit=False,
     )


def get_session(request: Request) -> Generator[Session, None, None]:
     """
     FastAPI dependency that provides a database session.

     The session factory is read from app.state so tests and alternative
     deployments can inject their own storage handle.

     Yields:
          Session: SQLAlchemy database session
     """
     session = request.app.state.session_factory()
     try:
          yield session
          session.commit()
     except Exception:
          session.rollback()
          raise
     finally:
          session.close()


def init_db(engine: Engine) -> None:
     """
     Create all tables defined in the models if they don't exist.

     For production, use Alembic migrations instead.
     """
     from models import Base
     Base.metadata.create_all(bind=engine)


def check_connection(engine: Engine) -> bool:
     """
     Test database connectivity.

     Returns:
          bool: True if connection successful, False otherwise
     """
     try:
          with engine.connect() as conn:
               conn.execute(text("SELECT 1"))
          return True
     except Exception:
          logger.exception("Database connection failed")
          return False
