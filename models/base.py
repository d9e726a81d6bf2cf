# models/base.py
from sqlalchemy import Column, DateTime, func
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
     """
     Base class for all SQLAlchemy models.
     Tables are named explicitly on each model.
     """


class CreatedAtMixin:
     """Adds a database-populated creation timestamp."""

     created_at = Column(DateTime, server_default=func.now(), nullable=False)
