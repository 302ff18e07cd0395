"""Error Hierarchy — typed exceptions shared by every layer of the sake API.

Invariants:
    - Every error has a code (ErrorCode), a message and an http_status
    - ErrorCode is a closed set shared with API clients
    - to_response() produces the {data, errors} envelope; causes are never included
    - DatabaseError keeps the underlying driver/SQLAlchemy exception on .cause for logs

Design Decisions:
    - Single hierarchy with SakeHackError base: one FastAPI handler renders all of them
    - ValidationError carries a field -> message mapping and renders one entry per field
"""

from enum import Enum


class ErrorCode(str, Enum):
    """Error codes exposed in the API envelope."""
    BAD_REQUEST = "BAD_REQUEST"
    NOT_FOUND = "NOT_FOUND"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    CONFLICT = "CONFLICT"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    GROUP_ACCESS_DENIED = "GROUP_ACCESS_DENIED"


class SakeHackError(Exception):
    """Base exception for all application errors."""

    def __init__(
        self,
        message: str,
        code: ErrorCode,
        http_status: int = 500,
        cause: BaseException | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.http_status = http_status
        self.cause = cause

    def error_entries(self) -> list[dict]:
        return [{"code": self.code.value, "message": self.message}]

    def to_response(self) -> dict:
        """Convert to the standard error envelope."""
        return {"data": None, "errors": self.error_entries()}

    def __str__(self) -> str:
        if self.cause is not None:
            return f"[{self.code.value}] {self.message}: {self.cause}"
        return f"[{self.code.value}] {self.message}"


# ─── Client Errors (400-level) ──────────────────────────────────

class BadRequestError(SakeHackError):
    def __init__(self, message: str):
        super().__init__(message, ErrorCode.BAD_REQUEST, 400)


class UnauthorizedError(SakeHackError):
    def __init__(self, message: str):
        super().__init__(message, ErrorCode.UNAUTHORIZED, 401)


class ForbiddenError(SakeHackError):
    def __init__(self, message: str):
        super().__init__(message, ErrorCode.FORBIDDEN, 403)


class GroupAccessDeniedError(SakeHackError):
    def __init__(self, message: str):
        super().__init__(message, ErrorCode.GROUP_ACCESS_DENIED, 403)


class NotFoundError(SakeHackError):
    """Referenced entity does not exist."""
    def __init__(self, message: str):
        super().__init__(message, ErrorCode.NOT_FOUND, 404)


class ConflictError(SakeHackError):
    def __init__(self, message: str):
        super().__init__(message, ErrorCode.CONFLICT, 409)


class ValidationError(SakeHackError):
    """Field-level input validation failed.

    Fields keep insertion order, so the envelope lists failures in the order
    they were checked.
    """

    def __init__(
        self,
        message: str = "Invalid request parameters",
        fields: dict[str, str] | None = None,
    ):
        super().__init__(message, ErrorCode.VALIDATION_ERROR, 400)
        self.fields: dict[str, str] = dict(fields or {})

    def add_field(self, field: str, message: str) -> "ValidationError":
        self.fields[field] = message
        return self

    def error_entries(self) -> list[dict]:
        if not self.fields:
            return super().error_entries()
        return [
            {"code": self.code.value, "message": f"{field}: {msg}"}
            for field, msg in self.fields.items()
        ]


# ─── Server Errors (500-level) ──────────────────────────────────

class InternalError(SakeHackError):
    def __init__(self, message: str = "An unexpected error occurred"):
        super().__init__(message, ErrorCode.INTERNAL_ERROR, 500)


class DatabaseError(SakeHackError):
    """Store operation failed. The cause is kept for logging only."""
    def __init__(self, message: str, cause: BaseException | None = None):
        super().__init__(message, ErrorCode.DATABASE_ERROR, 500, cause)
