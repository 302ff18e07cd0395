"""Pydantic Schemas — query validation and response bodies for API endpoints.

Invariants:
    - Schemas validate at system boundary (query string, API responses)

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
