"""Sakes Route — GET /sakes, the filtered and paginated catalog list.

Invariants:
    - Query parameters are validated by ListSakesQuery before the use case runs
    - Invalid parameters never reach the use case (400 VALIDATION_ERROR instead)
    - The use case runs under the configured request deadline; on expiry the
      pending query is cancelled
    - Errors are rendered by api/error_handlers.py, never here
"""

import asyncio
from typing import Annotated

from fastapi import APIRouter, Depends, Query

from app.api.dependencies import get_list_sakes_use_case, get_request_logger
from app.config import get_settings
from app.core.errors import InternalError
from app.infrastructure.observability import RequestLoggerAdapter
from app.schemas.common import ErrorResponse
from app.schemas.sake import (
    ListSakesQuery, ListSakesResponse, SakeListMeta, SakeResponse,
)
from app.services.list_sakes import (
    ListSakesInput, ListSakesOutput, ListSakesUseCase,
)

router = APIRouter(prefix="/sakes", tags=["sakes"])


@router.get(
    "",
    response_model=ListSakesResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def list_sakes(
    params: Annotated[ListSakesQuery, Query()],
    use_case: ListSakesUseCase = Depends(get_list_sakes_use_case),
    log: RequestLoggerAdapter = Depends(get_request_logger),
) -> ListSakesResponse:
    """List sakes, newest first, optionally filtered by type and brewery."""
    timeout = get_settings().request_timeout_seconds
    try:
        output = await asyncio.wait_for(
            use_case.execute(ListSakesInput(
                offset=params.offset,
                limit=params.limit,
                type_id=params.type_id,
                brewery_id=params.brewery_id,
            )),
            timeout=timeout,
        )
    except asyncio.TimeoutError:
        log.error(f"List sakes exceeded {timeout}s deadline")
        raise InternalError("Request timed out")
    return to_list_sakes_response(output)


def to_list_sakes_response(output: ListSakesOutput) -> ListSakesResponse:
    return ListSakesResponse(
        data=[SakeResponse.from_entity(s) for s in output.sakes],
        meta=SakeListMeta(
            total=output.pagination.total,
            offset=output.pagination.offset,
            limit=output.pagination.limit,
        ),
        errors=None,
    )
