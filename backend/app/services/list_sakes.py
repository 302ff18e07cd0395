"""List Sakes Use Case — normalizes pagination and delegates to the repository port.

Invariants:
    - offset < 0 is clamped to 0; limit outside [1, 100] is clamped to 20, silently
    - Exactly one repository call per execution, with a single ListSakesFilter
    - Repository exceptions propagate untouched (classification happens in the repository)
"""

import logging
from dataclasses import dataclass, field

from app.core.entities import Pagination, Sake
from app.core.pagination import clamp_pagination
from app.core.repository_protocols import ListSakesFilter, SakeRepository
from app.infrastructure.observability import traced

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ListSakesInput:
    offset: int
    limit: int
    type_id: int | None = None
    brewery_id: int | None = None


@dataclass(frozen=True)
class ListSakesOutput:
    pagination: Pagination
    sakes: list[Sake] = field(default_factory=list)


class ListSakesUseCase:
    """Fetch one page of sakes plus pagination metadata."""

    def __init__(
        self,
        repository: SakeRepository,
        log: logging.Logger | logging.LoggerAdapter | None = None,
    ):
        self._repository = repository
        self._log = log or logger

    @traced("ListSakesUseCase.execute")
    async def execute(self, input: ListSakesInput) -> ListSakesOutput:
        offset, limit = clamp_pagination(input.offset, input.limit)

        sakes, pagination = await self._repository.list(ListSakesFilter(
            offset=offset,
            limit=limit,
            type_id=input.type_id,
            brewery_id=input.brewery_id,
        ))
        return ListSakesOutput(pagination=pagination, sakes=sakes)
