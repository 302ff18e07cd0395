"""Dependency Wiring — builds the repository → use case chain per request.

Invariants:
    - Each request gets its own AsyncSession, repository and use case
    - The request-scoped logger is passed explicitly into every layer
"""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.repository_protocols import SakeRepository
from app.infrastructure.database import get_db
from app.infrastructure.observability import RequestLoggerAdapter, bind_logger
from app.infrastructure.sake_repository import SqlAlchemySakeRepository
from app.services.list_sakes import ListSakesUseCase


def get_request_logger(request: Request) -> RequestLoggerAdapter:
    return bind_logger("app.sakes", getattr(request.state, "request_id", None))


def get_sake_repository(
    db: AsyncSession = Depends(get_db),
    log: RequestLoggerAdapter = Depends(get_request_logger),
) -> SakeRepository:
    return SqlAlchemySakeRepository(db, log)


def get_list_sakes_use_case(
    repository: SakeRepository = Depends(get_sake_repository),
    log: RequestLoggerAdapter = Depends(get_request_logger),
) -> ListSakesUseCase:
    return ListSakesUseCase(repository, log)
