import mimetypes
from dataclasses import dataclass
from pathlib import Path

from docsync.api.exceptions import DocumentApiError
from docsync.documents.models import Document
from docsync.upload.exceptions import UploadError

DEFAULT_CONTENT_TYPE = "application/octet-stream"


@dataclass(frozen=True)
class UploadCandidate:
    """A file picked for upload: name, declared MIME type and raw bytes."""

    filename: str
    content_type: str
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)

    @classmethod
    def from_path(cls, path: Path, content_type: str | None = None) -> "UploadCandidate":
        """Read a file from disk, guessing its MIME type from the extension."""
        if content_type is None:
            guessed, _encoding = mimetypes.guess_type(path.name)
            content_type = guessed or DEFAULT_CONTENT_TYPE
        return cls(filename=path.name, content_type=content_type, content=path.read_bytes())


@dataclass(frozen=True)
class UploadOutcome:
    """Result of one submit call: either the created document or the error."""

    document: Document | None = None
    error: UploadError | DocumentApiError | None = None

    @property
    def succeeded(self) -> bool:
        return self.document is not None

    @property
    def message(self) -> str:
        if self.error is not None:
            return str(self.error) or "Upload failed"
        return "Upload successful!"
