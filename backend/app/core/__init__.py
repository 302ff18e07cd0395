"""Core Layer — entities, errors, pagination policy and repository contracts.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - No IO: everything here is plain data or pure functions
"""
