"""Database Layer — SQLAlchemy declarative Base shared by all records.

Invariants:
    - All ORM records inherit from db.base.Base
"""
