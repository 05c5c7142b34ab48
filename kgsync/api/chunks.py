"""Chunk collection endpoints."""

from kgsync.api.client import ApiClient
from kgsync.api.schema import parse_response
from kgsync.errors import TransportFailure
from kgsync.models.chunk import Chunk
from kgsync.models.collection import PageRequest, PageResponse


class ChunkAPI:
    def __init__(self, client: ApiClient) -> None:
        self._client = client

    async def get_chunks(self, request: PageRequest) -> PageResponse:
        """Fetch one page of the (optionally filtered) chunk collection."""
        payload = await self._client.get("/chunks", params=request.to_params())
        return parse_response(PageResponse, payload, "/chunks")

    async def get_chunk(self, chunk_id: str) -> Chunk:
        """Fetch a single chunk. The backend wraps it in a one-element list."""
        endpoint = f"/chunks/{chunk_id}"
        page = parse_response(PageResponse, await self._client.get(endpoint), endpoint)
        if not page.chunks:
            raise TransportFailure(f"Chunk not found: {chunk_id}", status_code=404)
        return page.chunks[0]
