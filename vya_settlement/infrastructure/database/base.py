"""Declarative base shared by ORM models and alembic."""

from sqlalchemy.orm import declarative_base

Base = declarative_base()
