"""Direct submission of file bytes to object storage."""

import logging

import httpx
from bs4 import BeautifulSoup

from kgsync.api.client import extract_error_message
from kgsync.errors import TransportFailure
from kgsync.models.upload import UploadFile, UploadTarget

logger = logging.getLogger(__name__)


def storage_error_detail(response: httpx.Response) -> str | None:
    """Pull the error text out of a rejected storage upload.

    S3-compatible services answer with an XML ``<Error>`` document carrying
    ``Code`` and ``Message``; other gateways may answer with JSON.

    Returns:
        The most specific message available, or None for an empty body.
    """
    text = response.text.strip()
    if not text:
        return None
    if text.startswith("<"):
        soup = BeautifulSoup(text, "xml")
        node = soup.find("Message") or soup.find("Code")
        detail = (node or soup).get_text(" ", strip=True)
        return detail or None

    message = extract_error_message(response)
    if message == f"HTTP Error: {response.status_code}":
        return None
    return message


class StorageClient:
    """Posts multipart uploads straight to a storage URL.

    Deliberately separate from ApiClient: the storage endpoint is a distinct
    system and must not receive control-plane credentials.
    """

    def __init__(
        self,
        timeout_sec: float = 120.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._http = http_client or httpx.AsyncClient(timeout=timeout_sec)

    async def submit(self, target: UploadTarget, file: UploadFile) -> None:
        """Upload ``file`` to ``target.url`` along with every target field.

        Raises:
            TransportFailure: On network errors or any non-2xx status.
        """
        file_part = (
            (file.filename, file.content, file.content_type)
            if file.content_type
            else (file.filename, file.content)
        )
        try:
            response = await self._http.post(
                target.url, data=target.fields, files={"file": file_part}
            )
        except httpx.HTTPError as e:
            logger.error("Storage upload failed for %s: %s", file.filename, e)
            raise TransportFailure(f"Upload failed: {e}") from e

        if not response.is_success:
            message = f"Upload failed: {response.status_code}"
            detail = storage_error_detail(response)
            if detail:
                message = f"{message} {detail}"
            logger.error("Storage rejected upload of %s: %s", file.filename, message)
            raise TransportFailure(
                message,
                status_code=response.status_code,
            )
        logger.info("Uploaded %s (%d bytes)", file.filename, len(file.content))

    async def aclose(self) -> None:
        await self._http.aclose()
