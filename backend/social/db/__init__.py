"""Database Metadata — SQLAlchemy declarative base shared by all ORM models.

Invariants:
    - Single Base; every table registers on Base.metadata
"""
