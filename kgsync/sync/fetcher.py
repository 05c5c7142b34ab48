"""Full enumeration of the paginated chunk collection."""

import logging
from typing import Protocol

from kgsync.errors import PartialEnumerationFailure, SyncError, TransportFailure
from kgsync.models.chunk import Chunk
from kgsync.models.collection import (
    DEFAULT_PAGE_SIZE,
    FetchResult,
    FilterSet,
    PageRequest,
    PageResponse,
)

logger = logging.getLogger(__name__)


class ChunkSource(Protocol):
    async def get_chunks(self, request: PageRequest) -> PageResponse: ...


class PaginatedFetcher:
    """Enumerates every chunk matching a scope and filter set.

    Pages are requested strictly one after another. The total reported by
    the first page is authoritative for the whole fetch, so a concurrent
    write on the backend cannot extend or shorten the enumeration midway.

    Each call to ``fetch`` is a new generation. Only the most recently
    started generation may update ``chunks``/``total``/``error``; results of
    superseded generations are dropped when they complete.

    Args:
        source: Anything exposing ``get_chunks(PageRequest)``.
        page_size: Items requested per page.
    """

    def __init__(self, source: ChunkSource, page_size: int = DEFAULT_PAGE_SIZE) -> None:
        if page_size <= 0:
            raise ValueError(f"page_size must be positive, got {page_size}")
        self._source = source
        self.page_size = page_size
        self._generation = 0
        self._chunks: list[Chunk] = []
        self._total = 0
        self._error: str | None = None
        self._loading = False

    @property
    def chunks(self) -> list[Chunk]:
        return list(self._chunks)

    @property
    def total(self) -> int:
        return self._total

    @property
    def error(self) -> str | None:
        return self._error

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def generation(self) -> int:
        """Token of the most recently started fetch."""
        return self._generation

    def clear_error(self) -> None:
        self._error = None

    async def fetch(
        self, workspace_id: str | None, filters: FilterSet | None = None
    ) -> FetchResult:
        """Run one fetch generation and apply it if it is still the latest.

        Args:
            workspace_id: Scope of the fetch, or None for every workspace.
            filters: Query constraints; defaults to an empty FilterSet.

        Returns:
            The generation's outcome. ``applied`` is False when a newer
            generation started before this one finished.
        """
        filters = filters or FilterSet()
        self._generation += 1
        generation = self._generation
        self._loading = True
        self._error = None

        try:
            items, total = await self._enumerate(workspace_id, filters)
            result = FetchResult(items=items, total=total, generation=generation)
        except SyncError as e:
            logger.error("Error fetching chunks (generation %d): %s", generation, e)
            result = FetchResult(
                error=str(e) or "Failed to fetch chunks", generation=generation
            )
        except Exception:
            logger.exception(
                "Unexpected error fetching chunks (generation %d)", generation
            )
            result = FetchResult(error="Failed to fetch chunks", generation=generation)

        if generation != self._generation:
            logger.debug(
                "Discarding stale fetch generation %d (latest is %d)",
                generation,
                self._generation,
            )
            return result.model_copy(update={"applied": False})

        self._chunks = result.items
        self._total = result.total
        self._error = result.error
        self._loading = False
        return result

    async def _enumerate(
        self, workspace_id: str | None, filters: FilterSet
    ) -> tuple[list[Chunk], int]:
        accumulated: list[Chunk] = []
        total: int | None = None
        skip = 0

        while True:
            request = filters.page_request(skip, self.page_size, workspace_id)
            try:
                page = await self._source.get_chunks(request)
            except TransportFailure as e:
                if skip == 0:
                    raise
                raise PartialEnumerationFailure(
                    f"Failed to fetch chunks at offset {skip}: {e.message}",
                    offset=skip,
                    fetched=len(accumulated),
                ) from e

            batch = page.chunks
            accumulated.extend(batch)
            if skip == 0:
                total = page.count

            if len(batch) < self.page_size:
                break
            if total is not None and len(accumulated) >= total:
                break
            skip += self.page_size

        logger.info(
            "Fetched %d chunk(s) in %d page(s)",
            len(accumulated),
            skip // self.page_size + 1,
        )
        return accumulated, total if total is not None else len(accumulated)
