"""Composition of the chunk fetcher and workspace cache behind one view."""

import asyncio
import logging

from kgsync.models.chunk import Chunk
from kgsync.models.collection import FetchResult, FilterSet
from kgsync.models.workspace import WorkspaceRef
from kgsync.sync.fetcher import PaginatedFetcher
from kgsync.sync.workspaces import WorkspaceRefCache

logger = logging.getLogger(__name__)

_UNCHANGED = object()


class ChunkView:
    """Read-only chunk listing that refetches when its inputs change.

    The fetch is keyed on the workspace scope plus every FilterSet field.
    ``refresh`` forces a new generation with the current inputs, which is
    what an upload completion callback should call.

    Args:
        fetcher: Chunk enumerator.
        workspace_cache: Workspace reference cache loaded alongside chunks.
        workspace_id: Initial scope, or None for every workspace.
        filters: Initial filters.
    """

    def __init__(
        self,
        fetcher: PaginatedFetcher,
        workspace_cache: WorkspaceRefCache,
        workspace_id: str | None = None,
        filters: FilterSet | None = None,
    ) -> None:
        self._fetcher = fetcher
        self._workspace_cache = workspace_cache
        self._workspace_id = workspace_id
        self._filters = filters or FilterSet()

    @property
    def workspace_id(self) -> str | None:
        return self._workspace_id

    @property
    def filters(self) -> FilterSet:
        return self._filters

    @property
    def chunks(self) -> list[Chunk]:
        return self._fetcher.chunks

    @property
    def total(self) -> int:
        return self._fetcher.total

    @property
    def error(self) -> str | None:
        return self._fetcher.error

    @property
    def loading(self) -> bool:
        return self._fetcher.loading

    @property
    def workspaces(self) -> list[WorkspaceRef]:
        return self._workspace_cache.workspaces

    async def load(self) -> FetchResult:
        """Fetch chunks and workspace references concurrently."""
        result, _ = await asyncio.gather(
            self._fetcher.fetch(self._workspace_id, self._filters),
            self._workspace_cache.fetch(),
        )
        return result

    async def update(
        self,
        workspace_id: str | None | object = _UNCHANGED,
        filters: FilterSet | None = None,
    ) -> FetchResult | None:
        """Change the inputs and refetch if they differ from the current ones.

        Returns:
            The new generation's result, or None when nothing changed.
        """
        new_scope = self._workspace_id if workspace_id is _UNCHANGED else workspace_id
        new_filters = self._filters if filters is None else filters
        if (new_scope, new_filters) == (self._workspace_id, self._filters):
            return None

        logger.debug(
            "Chunk view inputs changed: scope=%s filters=%s", new_scope, new_filters
        )
        self._workspace_id = new_scope
        self._filters = new_filters
        return await self._fetcher.fetch(self._workspace_id, self._filters)

    async def refresh(self) -> FetchResult:
        return await self._fetcher.fetch(self._workspace_id, self._filters)
