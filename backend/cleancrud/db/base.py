"""SQLAlchemy Declarative Base — shared base class for all ORM records.

Invariants:
    - All records inherit from Base
    - Base is the single source of truth for table metadata

Design Decisions:
    - Separate file for Base: avoids circular imports between records
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all Clean Crud ORM records."""
    pass
