"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
    - Async in Protocol: implementations do IO, the use case awaits them
"""

from dataclasses import dataclass
from typing import Protocol

from app.core.entities import Pagination, Sake


@dataclass(frozen=True)
class ListSakesFilter:
    """Single query descriptor for a filtered, paginated sake list.

    type_id / brewery_id set to None means "do not filter on this column".
    """
    offset: int
    limit: int
    type_id: int | None = None
    brewery_id: int | None = None


class SakeRepository(Protocol):
    """Contract for reading fully hydrated sakes — implemented by shell.

    Raises NotFoundError when a referenced type or brewery is missing and
    DatabaseError for any other store failure.
    """
    async def list(
        self, filter: ListSakesFilter,
    ) -> tuple[list[Sake], Pagination]: ...
