"""Upload flow data models."""

import mimetypes
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field

# Extensions the control plane accepts for document uploads
SUPPORTED_EXTENSIONS: tuple[str, ...] = ("pdf", "csv", "json", "txt")


class UploadStatus(str, Enum):
    IDLE = "idle"
    REQUESTING = "requesting"
    UPLOADING = "uploading"
    COMPLETED = "completed"
    FAILED = "failed"


class UploadTarget(BaseModel):
    """A short-lived destination authorizing a direct write to object storage."""

    url: str
    fields: dict[str, str] = Field(default_factory=dict)

    def resource_id(self, field_name: str) -> str | None:
        """Return the resource identifier embedded in the form fields, if any."""
        value = self.fields.get(field_name)
        return value or None


class UploadFile(BaseModel):
    """A file selected for upload, held in memory."""

    filename: str
    content: bytes
    content_type: str | None = None

    @property
    def extension(self) -> str:
        return Path(self.filename).suffix.lower().lstrip(".")

    @classmethod
    def from_path(cls, file_path: str | Path) -> "UploadFile":
        """Read a file from disk.

        Raises:
            FileNotFoundError: If file_path does not exist.
        """
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")
        content_type, _ = mimetypes.guess_type(path.name)
        return cls(
            filename=path.name,
            content=path.read_bytes(),
            content_type=content_type,
        )


class UploadSession(BaseModel):
    """State of a single upload attempt, owned by one orchestrator."""

    file: UploadFile | None = None
    progress: int = Field(default=0, ge=0, le=100)
    status: UploadStatus = UploadStatus.IDLE
    error: str | None = None
    document_id: str | None = None


class ProcessDocumentConfig(BaseModel):
    """Optional chunking parameters for an explicit ingestion request."""

    chunk_size: int | None = Field(default=None, ge=100, le=50000)
    chunk_overlap: int | None = Field(default=None, ge=0, le=1000)
