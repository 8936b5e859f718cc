class UploadError(Exception):
    """Base exception for upload submission errors."""


class UnsupportedTypeError(UploadError):
    """Raised when the file's MIME type is not JPEG, PNG or PDF."""


class FileTooLargeError(UploadError):
    """Raised when the file exceeds the maximum upload size."""


class UploaderBusyError(UploadError):
    """Raised when submit is called while another upload is still in flight."""
