"""HTTP clients for the control plane and object storage."""

from kgsync.api.chunks import ChunkAPI
from kgsync.api.client import ApiClient, extract_error_message
from kgsync.api.documents import DocumentAPI
from kgsync.api.storage import StorageClient
from kgsync.api.workspaces import WorkspaceAPI

__all__ = [
    "ApiClient",
    "ChunkAPI",
    "DocumentAPI",
    "StorageClient",
    "WorkspaceAPI",
    "extract_error_message",
]
