"""In-memory stand-ins for the remote endpoints."""

import asyncio

from kgsync.errors import TransportFailure
from kgsync.models import Chunk, PageRequest, PageResponse, WorkspacesResponse

WORKSPACE_RECORDS = [
    {
        "_id": "ws-1",
        "name": "Research",
        "description": "Papers",
        "public": False,
        "created_by": "user-1",
    },
    {"_id": "ws-2", "name": "Legal"},
]


def make_chunk(index: int, prefix: str = "chunk") -> Chunk:
    return Chunk(id=f"{prefix}-{index}", content=f"content {index}")


class FakeChunkSource:
    """Serves a collection of ``size`` chunks, reporting ``count`` as its total.

    ``count`` defaults to ``size``; pass None to omit it from replies.
    """

    def __init__(
        self,
        size: int,
        count: int | None = -1,
        fail_at: int | None = None,
    ) -> None:
        self.size = size
        self._count = count
        self.fail_at = fail_at
        self.requests: list[PageRequest] = []

    async def get_chunks(self, request: PageRequest) -> PageResponse:
        self.requests.append(request)
        if self.fail_at is not None and request.skip == self.fail_at:
            raise TransportFailure("Internal Server Error", status_code=500)
        end = min(request.skip + request.limit, self.size)
        items = [make_chunk(i) for i in range(request.skip, end)]
        count = self.size if self._count == -1 else self._count
        return PageResponse(chunks=items, count=count)


class GatedSource:
    """Holds each request until the gate for its data_type is released."""

    def __init__(self, fail: set[str] | None = None) -> None:
        self.gates: dict[str, asyncio.Event] = {}
        self.fail = fail or set()

    def release(self, data_type: str) -> None:
        self.gates.setdefault(data_type, asyncio.Event()).set()

    async def get_chunks(self, request: PageRequest) -> PageResponse:
        key = request.data_type or ""
        await self.gates.setdefault(key, asyncio.Event()).wait()
        if key in self.fail:
            raise TransportFailure("stale failure")
        return PageResponse(chunks=[make_chunk(0, prefix=key)], count=1)


class FakeWorkspaceSource:
    def __init__(self, records: list[dict] | None = None) -> None:
        self.records = records or []
        self.fail = False
        self.calls = 0

    async def get_workspaces(self) -> WorkspacesResponse:
        self.calls += 1
        if self.fail:
            raise TransportFailure("Service Unavailable", status_code=503)
        return WorkspacesResponse(workspaces=self.records)


class BrokenSource:
    """Raises ``error`` from every endpoint it stands in for."""

    def __init__(self, error: Exception) -> None:
        self.error = error

    async def get_chunks(self, request: PageRequest) -> PageResponse:
        raise self.error

    async def get_workspaces(self) -> WorkspacesResponse:
        raise self.error
