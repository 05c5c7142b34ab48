"""Two-phase upload: mint a storage target, then push bytes straight to it."""

import inspect
import logging
from collections.abc import Awaitable, Callable, Iterable
from typing import Protocol

from kgsync.errors import SyncError, TargetMetadataMissing, UploadStateError
from kgsync.models.upload import (
    SUPPORTED_EXTENSIONS,
    UploadFile,
    UploadSession,
    UploadStatus,
    UploadTarget,
)

logger = logging.getLogger(__name__)

# Progress checkpoints shown while the upload runs
PROGRESS_REQUESTING = 10
PROGRESS_UPLOADING = 30
PROGRESS_COMPLETED = 100

CompletionCallback = Callable[[UploadSession], Awaitable[None] | None]


class TargetIssuer(Protocol):
    async def generate_presigned_post(
        self, filename: str, workspace_id: str
    ) -> UploadTarget: ...


class StorageSink(Protocol):
    async def submit(self, target: UploadTarget, file: UploadFile) -> None: ...


class UploadOrchestrator:
    """Drives one upload session through its state machine.

    ``idle -> requesting -> uploading -> completed | failed``. A finished
    session only returns to idle through ``reset`` (or ``retry``, which
    resets and starts over with a freshly minted target).

    Completing an upload does not start ingestion of the document; the
    caller decides when to invoke ``DocumentAPI.process_document``.

    Args:
        issuer: Control-plane client that mints upload targets.
        storage: Client that posts the bytes to the target URL.
        resource_id_field: Target field holding the new document's id.
        on_complete: Called once with the session after a successful upload.
        allowed_extensions: File extensions accepted by ``select_file``.
    """

    def __init__(
        self,
        issuer: TargetIssuer,
        storage: StorageSink,
        resource_id_field: str = "x-amz-meta-document-id",
        on_complete: CompletionCallback | None = None,
        allowed_extensions: Iterable[str] = SUPPORTED_EXTENSIONS,
    ) -> None:
        self._issuer = issuer
        self._storage = storage
        self.resource_id_field = resource_id_field
        self._on_complete = on_complete
        self.allowed_extensions = tuple(
            e.lower().lstrip(".") for e in allowed_extensions
        )
        self._session = UploadSession()

    @property
    def session(self) -> UploadSession:
        return self._session

    def select_file(self, file: UploadFile) -> None:
        """Attach the file to upload to the idle session.

        Raises:
            UploadStateError: If an upload has already started.
            ValueError: If the file extension is not accepted.
        """
        self._require_status(UploadStatus.IDLE, "select a file")
        if file.extension not in self.allowed_extensions:
            raise ValueError(
                f"Unsupported file format: .{file.extension} "
                f"(expected one of {', '.join(self.allowed_extensions)})"
            )
        self._session.file = file

    def reset(self, keep_file: bool = False) -> UploadSession:
        """Discard the current session and start a fresh idle one."""
        file = self._session.file if keep_file else None
        self._session = UploadSession(file=file)
        return self._session

    async def upload(
        self, workspace_id: str, file: UploadFile | None = None
    ) -> UploadSession:
        """Run the upload for the selected (or given) file.

        Transport failures and missing target metadata end the session in
        ``failed`` with a message in ``session.error``; they are not raised.

        Raises:
            UploadStateError: If the session is not idle or has no file.
        """
        if file is not None:
            self.select_file(file)
        self._require_status(UploadStatus.IDLE, "start an upload")
        session = self._session
        if session.file is None:
            raise UploadStateError("No file selected for upload")

        try:
            session.status = UploadStatus.REQUESTING
            session.progress = PROGRESS_REQUESTING
            session.error = None
            target = await self._issuer.generate_presigned_post(
                session.file.filename, workspace_id
            )
            document_id = target.resource_id(self.resource_id_field)
            if document_id is None:
                raise TargetMetadataMissing(self.resource_id_field)

            session.status = UploadStatus.UPLOADING
            session.progress = PROGRESS_UPLOADING
            await self._storage.submit(target, session.file)
        except SyncError as e:
            session.status = UploadStatus.FAILED
            session.error = str(e) or "Upload failed"
            logger.error(
                "Upload of %s failed: %s", session.file.filename, session.error
            )
            return session

        session.document_id = document_id
        session.status = UploadStatus.COMPLETED
        session.progress = PROGRESS_COMPLETED
        logger.info(
            "Upload of %s completed (document %s)", session.file.filename, document_id
        )

        if self._on_complete is not None:
            outcome = self._on_complete(session)
            if inspect.isawaitable(outcome):
                await outcome
        return session

    async def retry(self, workspace_id: str) -> UploadSession:
        """Start over after a failure, minting a new upload target."""
        self._require_status(UploadStatus.FAILED, "retry")
        self.reset(keep_file=True)
        return await self.upload(workspace_id)

    def _require_status(self, expected: UploadStatus, action: str) -> None:
        if self._session.status is not expected:
            raise UploadStateError(
                f"Cannot {action} while upload is {self._session.status.value}"
            )
