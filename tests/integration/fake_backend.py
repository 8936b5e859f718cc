import re
from datetime import datetime, timezone
from typing import Any

import httpx

_FILENAME = re.compile(rb'name="file"; filename="([^"]+)"')


class FakeBackend:
    """In-process stand-in for the gateway plus Document API.

    Documents advance one status step per ``advance()`` call, the way the
    real background pipeline moves them along.
    """

    def __init__(self) -> None:
        self.documents: list[dict[str, Any]] = []
        self.requests: list[httpx.Request] = []
        self.list_status: int = 200
        self.upload_status: int = 201
        self.proxy_down = False
        self._next_id = 1

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    @property
    def uploads(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == "POST"]

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path == "/health":
            return httpx.Response(200, json={"status": "healthy", "service": "frontend"})
        if self.proxy_down:
            return httpx.Response(502, json={"error": "Proxy error"})
        if request.url.path != "/api/documents":
            return httpx.Response(404, json={"error": "Not found"})
        if request.method == "GET":
            if self.list_status != 200:
                return httpx.Response(self.list_status)
            return httpx.Response(200, json=list(self.documents))
        if request.method == "POST":
            return self._create(request)
        return httpx.Response(405)

    def advance(self) -> None:
        for record in self.documents:
            if record["status"] == "PENDING":
                record["status"] = "PROCESSING"
            elif record["status"] == "PROCESSING":
                record["status"] = "COMPLETED"
                record["documentType"] = "invoice"
                record["extractedText"] = "ACME Corp\nInvoice 2024-001\nTotal 42.00 EUR"
                record["processedAt"] = _now()

    def _create(self, request: httpx.Request) -> httpx.Response:
        if self.upload_status >= 400:
            return httpx.Response(self.upload_status)
        match = _FILENAME.search(request.content)
        if match is None:
            return httpx.Response(400, json={"error": "Missing file"})
        record = {
            "id": self._next_id,
            "filename": match.group(1).decode(),
            "status": "PENDING",
            "documentType": None,
            "extractedText": None,
            "createdAt": _now(),
            "processedAt": None,
        }
        self._next_id += 1
        self.documents.insert(0, record)
        return httpx.Response(self.upload_status, json=record)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()
