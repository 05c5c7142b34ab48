"""Chunk data model."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from kgsync.models.workspace import WorkspaceRef


class DocumentRef(BaseModel):
    """Link from a chunk back to the document it was extracted from."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str = Field(alias="_id")
    filename: str = ""


class Chunk(BaseModel):
    """An atomic unit of ingested content returned by the collection API.

    Immutable once fetched. ``tags`` and ``user_metadata`` are plain lists/
    mappings when the request was workspace-scoped and keyed by workspace id
    otherwise.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str = Field(alias="_id")
    data_type: Literal["string", "object"] = "string"
    content: str | dict[str, Any] = ""
    embedding: list[float] | None = None
    document: DocumentRef | None = None
    workspaces: list[WorkspaceRef] = Field(default_factory=list)
    metadata: dict[str, Any] = Field(default_factory=dict)
    tags: list[str] | dict[str, list[str]] = Field(default_factory=list)
    user_metadata: dict[str, Any] = Field(default_factory=dict)
    created_at: str | None = None
    updated_at: str | None = None
    created_by: str | None = None

    @property
    def document_id(self) -> str | None:
        return self.document.id if self.document else None

    @property
    def document_filename(self) -> str | None:
        return self.document.filename if self.document else None
