"""Data models for the synchronization layer."""

from kgsync.models.chunk import Chunk, DocumentRef
from kgsync.models.collection import (
    DEFAULT_PAGE_SIZE,
    FetchResult,
    FilterSet,
    PageRequest,
    PageResponse,
    SortOrder,
)
from kgsync.models.preferences import DisplayPreferences
from kgsync.models.upload import (
    SUPPORTED_EXTENSIONS,
    ProcessDocumentConfig,
    UploadFile,
    UploadSession,
    UploadStatus,
    UploadTarget,
)
from kgsync.models.workspace import Workspace, WorkspaceRef, WorkspacesResponse

__all__ = [
    "Chunk",
    "DEFAULT_PAGE_SIZE",
    "DisplayPreferences",
    "DocumentRef",
    "FetchResult",
    "FilterSet",
    "PageRequest",
    "PageResponse",
    "ProcessDocumentConfig",
    "SUPPORTED_EXTENSIONS",
    "SortOrder",
    "UploadFile",
    "UploadSession",
    "UploadStatus",
    "UploadTarget",
    "Workspace",
    "WorkspaceRef",
    "WorkspacesResponse",
]
