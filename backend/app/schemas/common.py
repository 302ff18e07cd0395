"""Envelope Schemas — error entries shared by every endpoint.

Invariants:
    - Error responses always carry data=None and a non-empty errors list
    - code is one of ErrorCode
"""

from pydantic import BaseModel

from app.core.errors import ErrorCode


class APIError(BaseModel):
    code: ErrorCode
    message: str


class ErrorResponse(BaseModel):
    data: None = None
    errors: list[APIError]
