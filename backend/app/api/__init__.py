"""API Layer — FastAPI routes, dependency wiring, middleware and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Every response uses the {data, meta?, errors} envelope

Design Decisions:
    - Thin routes: validate, call one use case, map the result
"""
