"""Database Metadata — SQLAlchemy declarative Base shared by models and Alembic.

Design Decisions:
    - asyncpg driver for PostgreSQL (native async, no thread pool overhead)
"""
