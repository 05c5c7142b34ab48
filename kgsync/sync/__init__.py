"""Synchronization of local state with the remote collection and storage."""

from kgsync.sync.fetcher import PaginatedFetcher
from kgsync.sync.upload import UploadOrchestrator
from kgsync.sync.view import ChunkView
from kgsync.sync.workspaces import WorkspaceRefCache, normalize_workspaces

__all__ = [
    "ChunkView",
    "PaginatedFetcher",
    "UploadOrchestrator",
    "WorkspaceRefCache",
    "normalize_workspaces",
]
