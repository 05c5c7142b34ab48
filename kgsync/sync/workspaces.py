"""Best-effort cache of workspace id/name references."""

import logging
from typing import Protocol

from pydantic import ValidationError

from kgsync.errors import BestEffortFailure
from kgsync.models.workspace import Workspace, WorkspaceRef, WorkspacesResponse

logger = logging.getLogger(__name__)


class WorkspaceSource(Protocol):
    async def get_workspaces(self) -> WorkspacesResponse: ...


def normalize_workspaces(response: WorkspacesResponse) -> list[WorkspaceRef]:
    """Project raw workspace records to id/name references.

    Records that lack an id or a name are skipped.
    """
    refs: list[WorkspaceRef] = []
    for record in response.workspaces:
        try:
            refs.append(Workspace.model_validate(record).to_ref())
        except ValidationError:
            logger.warning("Skipping malformed workspace record: %r", record)
    return refs


class WorkspaceRefCache:
    """Holds the latest successfully fetched workspace references.

    Failures never propagate: they are logged, kept in ``last_failure``, and
    the previously cached list stays in place.
    """

    def __init__(self, source: WorkspaceSource) -> None:
        self._source = source
        self._workspaces: list[WorkspaceRef] = []
        self.last_failure: BestEffortFailure | None = None

    @property
    def workspaces(self) -> list[WorkspaceRef]:
        return list(self._workspaces)

    def lookup(self, workspace_id: str) -> WorkspaceRef | None:
        for ref in self._workspaces:
            if ref.id == workspace_id:
                return ref
        return None

    async def fetch(self) -> list[WorkspaceRef]:
        try:
            response = await self._source.get_workspaces()
        except Exception as e:
            self.last_failure = BestEffortFailure(f"Failed to fetch workspaces: {e}")
            logger.warning("%s", self.last_failure)
            return self.workspaces

        self._workspaces = normalize_workspaces(response)
        self.last_failure = None
        return self.workspaces
