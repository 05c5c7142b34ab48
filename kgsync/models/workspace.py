"""Workspace data models."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class WorkspaceRef(BaseModel):
    """Minimal id + name projection of a workspace, used for lookup/display."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str = Field(alias="_id")
    name: str


class Workspace(BaseModel):
    """Full workspace record as returned by the control plane."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id")
    name: str
    description: str | None = None
    public: bool = False
    created_by: str | None = None
    created_at: str | None = None
    updated_at: str | None = None

    def to_ref(self) -> WorkspaceRef:
        return WorkspaceRef(id=self.id, name=self.name)


class WorkspacesResponse(BaseModel):
    """Reply of the workspace list endpoint.

    Records are kept raw; normalization happens in the workspace cache so a
    single malformed record does not reject the whole list.
    """

    workspaces: list[dict[str, Any]] = Field(default_factory=list)
    message: str = ""
    status: str = ""
    count: int | None = None
