"""Infrastructure Layer — PostgreSQL, Valkey and logging adapters.

Invariants:
    - Driver and SQLAlchemy errors are mapped to core/errors.py types here
    - Pools are process singletons created by the FastAPI lifespan
"""
