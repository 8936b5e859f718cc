import io

import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from docsync.config.settings import Settings

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


@pytest.fixture()
def fast_settings() -> Settings:
    """Settings with short timers so polling tests finish quickly."""
    return Settings(
        api_base_url="http://testserver/api",
        health_url="http://testserver/health",
        refresh_interval_seconds=0.01,
        upload_reset_delay_seconds=0,
    )


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Invoice 2024-001")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def png_bytes() -> bytes:
    """A 1 MiB PNG payload."""
    size = 1024 * 1024
    return PNG_SIGNATURE + b"\x00" * (size - len(PNG_SIGNATURE))
