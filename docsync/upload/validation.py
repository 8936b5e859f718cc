from docsync.upload.exceptions import FileTooLargeError, UnsupportedTypeError

SUPPORTED_TYPES = frozenset(
    {
        "image/jpeg",
        "image/png",
        "image/jpg",
        "application/pdf",
    }
)
MAX_FILE_SIZE = 20 * 1024 * 1024


def validate_upload(
    content_type: str, size_bytes: int, max_size_bytes: int = MAX_FILE_SIZE
) -> None:
    """Check a candidate file before anything goes over the network.

    Type is checked before size. A file of exactly ``max_size_bytes`` is accepted.

    Raises:
        UnsupportedTypeError: if content_type is not JPEG, PNG or PDF.
        FileTooLargeError: if size_bytes exceeds max_size_bytes.
    """
    if content_type.lower() not in SUPPORTED_TYPES:
        raise UnsupportedTypeError("Unsupported file type. Please upload JPG, PNG, or PDF.")
    if size_bytes > max_size_bytes:
        raise FileTooLargeError(
            f"File is too large. Maximum size is {max_size_bytes // (1024 * 1024)}MB."
        )
