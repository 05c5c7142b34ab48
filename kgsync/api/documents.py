"""Document endpoints: upload targets and explicit ingestion."""

import logging
from typing import Any

from kgsync.api.client import ApiClient
from kgsync.api.schema import parse_response
from kgsync.models.upload import ProcessDocumentConfig, UploadTarget

logger = logging.getLogger(__name__)


class DocumentAPI:
    def __init__(self, client: ApiClient) -> None:
        self._client = client

    async def generate_presigned_post(
        self, filename: str, workspace_id: str
    ) -> UploadTarget:
        """Ask the control plane to mint a direct-upload target for ``filename``."""
        endpoint = "/documents/generate_presigned"
        payload = await self._client.post(
            endpoint, {"filename": filename, "workspace_id": workspace_id}
        )
        return parse_response(UploadTarget, payload, endpoint)

    async def process_document(
        self, document_id: str, config: ProcessDocumentConfig | None = None
    ) -> dict[str, Any]:
        """Start ingestion of an uploaded document.

        Uploading never triggers this; callers invoke it explicitly once the
        bytes are in storage.
        """
        body = config.model_dump(exclude_none=True) if config else None
        logger.info("Requesting processing of document %s", document_id)
        return await self._client.post(f"/documents/{document_id}/process", body)
