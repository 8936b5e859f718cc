from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime

from docsync.documents.models import Document, DocumentStatus
from docsync.presentation.status import StatusBadge, status_badge

PLACEHOLDER = "-"
UNCLASSIFIED = "Not yet classified"
PROCESSING_NOTICE = "Document is being processed. Results will appear soon."
EMPTY_MESSAGE = "No documents yet. Upload your first document above!"
LOADING_MESSAGE = "Loading documents..."


@dataclass(frozen=True)
class DocumentRow:
    """One line of the document table."""

    id: int
    filename: str
    document_type: str
    badge: StatusBadge
    created: str


@dataclass(frozen=True)
class DocumentDetail:
    """Everything shown when a single document is focused."""

    id: int
    filename: str
    badge: StatusBadge
    document_type: str
    created: str
    processed: str | None = None
    extracted_text: str | None = None
    notice: str | None = None


def format_timestamp(value: datetime | None) -> str:
    """Local-time rendering of a timestamp; missing values become a placeholder."""
    if value is None:
        return PLACEHOLDER
    return value.astimezone().strftime("%Y-%m-%d %H:%M:%S")


def document_row(document: Document) -> DocumentRow:
    return DocumentRow(
        id=document.id,
        filename=document.filename,
        document_type=document.document_type or PLACEHOLDER,
        badge=status_badge(document.status),
        created=format_timestamp(document.created_at),
    )


def document_detail(document: Document) -> DocumentDetail:
    return DocumentDetail(
        id=document.id,
        filename=document.filename,
        badge=status_badge(document.status),
        document_type=document.document_type or UNCLASSIFIED,
        created=format_timestamp(document.created_at),
        processed=format_timestamp(document.processed_at) if document.processed_at else None,
        extracted_text=document.extracted_text or None,
        notice=PROCESSING_NOTICE if document.state is DocumentStatus.PROCESSING else None,
    )


def render_table(
    documents: Sequence[Document], *, loading: bool = False, error: str | None = None
) -> str:
    """Plain-text document list, as printed by the command-line client."""
    if loading and not documents:
        return LOADING_MESSAGE
    if error:
        return f"{error} (retry with a manual refresh)"
    if not documents:
        return EMPTY_MESSAGE
    lines = [f"Documents ({len(documents)})"]
    for row in (document_row(document) for document in documents):
        lines.append(
            f"{row.badge.icon} {row.filename:<40} {row.document_type:<16} "
            f"{row.badge.label:<11} {row.created}"
        )
    return "\n".join(lines)
