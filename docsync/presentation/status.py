from dataclasses import dataclass

from docsync.documents.models import DocumentStatus


@dataclass(frozen=True)
class StatusBadge:
    css_class: str
    icon: str
    label: str


STATUS_CLASSES: dict[DocumentStatus, str] = {
    DocumentStatus.PENDING: "status-pending",
    DocumentStatus.PROCESSING: "status-processing",
    DocumentStatus.COMPLETED: "status-completed",
    DocumentStatus.FAILED: "status-failed",
}

STATUS_ICONS: dict[DocumentStatus, str] = {
    DocumentStatus.PENDING: "⏱",
    DocumentStatus.PROCESSING: "⏳",
    DocumentStatus.COMPLETED: "✓",
    DocumentStatus.FAILED: "✗",
}


def status_badge(status: str) -> StatusBadge:
    """Display class and glyph for a raw status; unknown values render as pending."""
    state = DocumentStatus.from_value(status)
    return StatusBadge(
        css_class=STATUS_CLASSES[state],
        icon=STATUS_ICONS[state],
        label=status,
    )
