"""Request/response models for the paginated chunk collection."""

from enum import IntEnum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from kgsync.models.chunk import Chunk

DEFAULT_PAGE_SIZE = 50


class SortOrder(IntEnum):
    """Creation-time ordering of a chunk listing."""

    ASCENDING = 1
    DESCENDING = -1


class PageRequest(BaseModel):
    """Query parameters for one page of the chunk collection."""

    skip: int = Field(default=0, ge=0)
    limit: int = DEFAULT_PAGE_SIZE
    order: SortOrder = SortOrder.DESCENDING
    data_type: Literal["string", "object"] | None = None
    document_id: str | None = None
    document_filename: str | None = None
    seed_concept: str | None = None
    include_embeddings: bool | None = None
    workspace_id: str | None = None

    def to_params(self) -> dict[str, Any]:
        """Return query parameters, leaving out every field that is None."""
        return self.model_dump(mode="json", exclude_none=True)


class FilterSet(BaseModel):
    """Optional constraints narrowing a collection fetch.

    Every field defaults to None, meaning "not sent"; ``order`` defaults to
    newest first. Equal FilterSets describe the same query.
    """

    model_config = ConfigDict(frozen=True)

    data_type: Literal["string", "object"] | None = None
    order: SortOrder = SortOrder.DESCENDING
    document_id: str | None = None
    document_filename: str | None = None
    seed_concept: str | None = None
    include_embeddings: bool | None = None

    def page_request(
        self,
        skip: int,
        limit: int = DEFAULT_PAGE_SIZE,
        workspace_id: str | None = None,
    ) -> PageRequest:
        """Build the request for the page at ``skip`` within ``workspace_id``."""
        return PageRequest(
            skip=skip,
            limit=limit,
            workspace_id=workspace_id or None,
            **self.model_dump(),
        )


class PageResponse(BaseModel):
    """One page of the chunk collection.

    ``count`` is the backend's total for the query at the time the page was
    served, or None when the backend omitted it.
    """

    chunks: list[Chunk] = Field(default_factory=list)
    count: int | None = None
    message: str = ""
    status: str = ""


class FetchResult(BaseModel):
    """Outcome of one fetch generation."""

    items: list[Chunk] = Field(default_factory=list)
    total: int = 0
    error: str | None = None
    generation: int
    applied: bool = True
