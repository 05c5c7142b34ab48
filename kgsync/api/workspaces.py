"""Workspace endpoints."""

from kgsync.api.client import ApiClient
from kgsync.api.schema import parse_response
from kgsync.models.workspace import WorkspacesResponse


class WorkspaceAPI:
    def __init__(self, client: ApiClient) -> None:
        self._client = client

    async def get_workspaces(self) -> WorkspacesResponse:
        payload = await self._client.get("/workspaces")
        return parse_response(WorkspacesResponse, payload, "/workspaces")
