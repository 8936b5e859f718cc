from typing import Any

import httpx

from docsync.api.exceptions import (
    DocumentApiNetworkError,
    DocumentApiStatusError,
    DocumentPayloadError,
)
from docsync.documents.models import Document
from docsync.logging.logger import Log


class DocumentApiClient:
    """Async client for the Document API behind the gateway.

    All requests are issued relative to ``base_url`` (e.g. ``http://host/api``).
    """

    DOCUMENTS_PATH = "documents"

    def __init__(
        self,
        *,
        base_url: str,
        timeout_seconds: float,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout_seconds,
            transport=transport,
        )

    async def __aenter__(self) -> "DocumentApiClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def list_documents(self) -> list[Document]:
        """Fetch the whole collection, most recent first.

        Raises:
            DocumentApiNetworkError: if the API cannot be reached.
            DocumentApiStatusError: on a non-2xx response.
            DocumentPayloadError: if the body is not a list of document records.
        """
        response = await self._send("GET", self.DOCUMENTS_PATH)
        self._raise_for_status(response, "Failed to fetch documents")
        payload = self._json(response)
        if not isinstance(payload, list):
            raise DocumentPayloadError(
                f"Expected a list of documents, got {type(payload).__name__}"
            )
        return [Document.from_api(item) for item in payload]

    async def upload_document(
        self, filename: str, content: bytes, content_type: str
    ) -> Document:
        """Upload one file as multipart field ``file`` and return the created record."""
        response = await self._send(
            "POST",
            self.DOCUMENTS_PATH,
            files={"file": (filename, content, content_type)},
        )
        self._raise_for_status(response, f"Upload failed: {response.reason_phrase}")
        return Document.from_api(self._json(response))

    async def check_health(self, url: str) -> bool:
        """Probe the gateway liveness endpoint. Never raises."""
        try:
            response = await self._client.get(url)
        except httpx.HTTPError as exc:
            Log.warning(f"Health check failed for {url}: {exc}")
            return False
        if not response.is_success:
            Log.warning(f"Health check for {url} returned {response.status_code}")
            return False
        return True

    async def _send(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            return await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            raise DocumentApiNetworkError(
                f"Document API network error: {exc}"
            ) from exc

    @staticmethod
    def _raise_for_status(response: httpx.Response, message: str) -> None:
        if response.is_success:
            return
        detail = _error_detail(response)
        Log.warning(
            f"{response.request.method} {response.request.url} returned "
            f"{response.status_code} {response.reason_phrase} (detail: {detail})"
        )
        raise DocumentApiStatusError(
            message,
            status_code=response.status_code,
            reason=response.reason_phrase,
            detail=detail,
        )

    @staticmethod
    def _json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise DocumentPayloadError(f"Response is not valid JSON: {exc}") from exc


def _error_detail(response: httpx.Response) -> str | None:
    """Extract ``{"error": ...}`` from a gateway or backend error body, if any."""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and isinstance(body.get("error"), str):
        return body["error"]
    return None

