from docsync.upload.models import UploadCandidate, UploadOutcome
from docsync.upload.submitter import UploadSubmitter
from docsync.upload.validation import validate_upload

__all__ = ["UploadCandidate", "UploadOutcome", "UploadSubmitter", "validate_upload"]
