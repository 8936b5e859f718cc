from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any

from docsync.api.exceptions import DocumentPayloadError


class DocumentStatus(str, Enum):
    """Processing status as reported by the backend."""

    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"

    @classmethod
    def from_value(cls, value: object) -> "DocumentStatus":
        """Map a raw status to a member; unknown values count as PENDING."""
        try:
            return cls(value)
        except ValueError:
            return cls.PENDING

    @property
    def is_terminal(self) -> bool:
        return self in (DocumentStatus.COMPLETED, DocumentStatus.FAILED)


def parse_timestamp(value: object) -> datetime:
    """Parse an ISO-8601 timestamp from the API."""
    if not isinstance(value, str):
        raise DocumentPayloadError(f"Invalid timestamp: {value!r}")
    try:
        return datetime.fromisoformat(value)
    except ValueError as exc:
        raise DocumentPayloadError(f"Invalid timestamp: {value!r}") from exc


@dataclass(frozen=True)
class Document:
    """A single uploaded document plus backend-derived metadata.

    Instances are never modified on the client; every refresh replaces them.
    """

    id: int
    filename: str
    status: str
    created_at: datetime
    document_type: str | None = None
    extracted_text: str | None = None
    processed_at: datetime | None = None

    @property
    def state(self) -> DocumentStatus:
        return DocumentStatus.from_value(self.status)

    @property
    def is_terminal(self) -> bool:
        return self.state.is_terminal

    @classmethod
    def from_api(cls, payload: Any) -> "Document":
        """Build a Document from one camelCase JSON record.

        Raises:
            DocumentPayloadError: if a required field is missing or malformed.
        """
        if not isinstance(payload, dict):
            raise DocumentPayloadError(f"Document record must be an object, got {payload!r}")
        missing = [
            key for key in ("id", "filename", "status", "createdAt") if payload.get(key) is None
        ]
        if missing:
            raise DocumentPayloadError(f"Document record is missing fields: {missing}")
        try:
            document_id = int(payload["id"])
        except (TypeError, ValueError) as exc:
            raise DocumentPayloadError(f"Invalid document id: {payload['id']!r}") from exc

        processed_at = payload.get("processedAt")
        return cls(
            id=document_id,
            filename=str(payload["filename"]),
            status=str(payload["status"]),
            created_at=parse_timestamp(payload["createdAt"]),
            document_type=payload.get("documentType"),
            extracted_text=payload.get("extractedText"),
            processed_at=parse_timestamp(processed_at) if processed_at is not None else None,
        )
