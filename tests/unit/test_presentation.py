from datetime import datetime

import pytest

from docsync.documents.models import Document
from docsync.presentation.status import status_badge
from docsync.presentation.views import (
    EMPTY_MESSAGE,
    LOADING_MESSAGE,
    PROCESSING_NOTICE,
    document_detail,
    document_row,
    format_timestamp,
    render_table,
)


def _doc(status: str = "PENDING", **overrides: object) -> Document:
    fields: dict[str, object] = {
        "id": 1,
        "filename": "scan.png",
        "status": status,
        "created_at": datetime(2024, 5, 1, 10, 0),
    }
    fields.update(overrides)
    return Document(**fields)  # type: ignore[arg-type]


class TestStatusBadge:
    @pytest.mark.parametrize(
        ("status", "css_class", "icon"),
        [
            ("PENDING", "status-pending", "⏱"),
            ("PROCESSING", "status-processing", "⏳"),
            ("COMPLETED", "status-completed", "✓"),
            ("FAILED", "status-failed", "✗"),
        ],
    )
    def test_known_statuses(self, status: str, css_class: str, icon: str) -> None:
        badge = status_badge(status)

        assert badge.css_class == css_class
        assert badge.icon == icon
        assert badge.label == status

    def test_unknown_status_renders_as_pending(self) -> None:
        badge = status_badge("ARCHIVED")

        assert badge.css_class == "status-pending"
        assert badge.icon == "⏱"
        assert badge.label == "ARCHIVED"


class TestRowsAndDetail:
    def test_missing_timestamp_renders_placeholder(self) -> None:
        assert format_timestamp(None) == "-"

    def test_row_uses_placeholder_for_unclassified(self) -> None:
        row = document_row(_doc())

        assert row.document_type == "-"
        assert row.badge.css_class == "status-pending"

    def test_detail_for_pending_document(self) -> None:
        detail = document_detail(_doc())

        assert detail.document_type == "Not yet classified"
        assert detail.processed is None
        assert detail.extracted_text is None
        assert detail.notice is None

    def test_detail_for_processing_document_has_notice(self) -> None:
        detail = document_detail(_doc("PROCESSING"))

        assert detail.notice == PROCESSING_NOTICE

    def test_detail_for_completed_document(self) -> None:
        detail = document_detail(
            _doc(
                "COMPLETED",
                document_type="invoice",
                extracted_text="Total 42.00",
                processed_at=datetime(2024, 5, 1, 10, 1),
            )
        )

        assert detail.document_type == "invoice"
        assert detail.extracted_text == "Total 42.00"
        assert detail.processed is not None and detail.processed != "-"
        assert detail.notice is None


class TestRenderTable:
    def test_empty_collection(self) -> None:
        assert render_table([]) == EMPTY_MESSAGE

    def test_loading_before_first_result(self) -> None:
        assert render_table([], loading=True) == LOADING_MESSAGE

    def test_loading_takes_precedence_over_error(self) -> None:
        assert render_table([], loading=True, error="Failed to fetch documents") == LOADING_MESSAGE

    def test_error_replaces_list(self) -> None:
        assert render_table([_doc()], error="Failed to fetch documents").startswith(
            "Failed to fetch documents"
        )

    def test_lists_documents(self) -> None:
        table = render_table([_doc(), _doc("FAILED", id=2, filename="broken.pdf")])

        lines = table.splitlines()
        assert lines[0] == "Documents (2)"
        assert "scan.png" in lines[1]
        assert lines[2].startswith("✗ broken.pdf")
