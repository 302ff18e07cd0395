"""Pagination Policy — pure clamping rules for list queries.

Invariants:
    - offset < 0 becomes DEFAULT_OFFSET
    - limit outside [MIN_LIMIT, MAX_LIMIT] becomes DEFAULT_LIMIT
    - Clamping is silent; boundary validation lives in the API layer
"""

DEFAULT_OFFSET = 0
DEFAULT_LIMIT = 20
MIN_LIMIT = 1
MAX_LIMIT = 100


def clamp_offset(offset: int) -> int:
    return DEFAULT_OFFSET if offset < 0 else offset


def clamp_limit(limit: int) -> int:
    if limit < MIN_LIMIT or limit > MAX_LIMIT:
        return DEFAULT_LIMIT
    return limit


def clamp_pagination(offset: int, limit: int) -> tuple[int, int]:
    """Return (offset, limit) with out-of-range values replaced by defaults."""
    return clamp_offset(offset), clamp_limit(limit)
