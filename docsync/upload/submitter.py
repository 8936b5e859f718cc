import asyncio
import contextlib

from docsync.api.client import DocumentApiClient
from docsync.api.exceptions import DocumentApiError
from docsync.config.settings import Settings
from docsync.logging.logger import Log
from docsync.upload.exceptions import UploadError, UploaderBusyError
from docsync.upload.models import UploadCandidate, UploadOutcome
from docsync.upload.validation import validate_upload


class UploadSubmitter:
    """Validate -> transmit -> report, with a single upload in flight.

    ``busy`` stays set from the request until the outcome has been shown;
    calling ``submit`` while busy raises ``UploaderBusyError``.
    """

    SUCCESS_LABEL = "Upload successful!"

    def __init__(self, api: DocumentApiClient, settings: Settings) -> None:
        self._api = api
        self._settings = settings
        self._busy = False
        self._progress = ""
        self._reset_task: asyncio.Task[None] | None = None

    @property
    def busy(self) -> bool:
        return self._busy

    @property
    def progress(self) -> str:
        return self._progress

    def validate(self, candidate: UploadCandidate) -> None:
        validate_upload(
            candidate.content_type,
            candidate.size,
            self._settings.max_upload_size_bytes,
        )

    async def submit(self, candidate: UploadCandidate) -> UploadOutcome:
        """Upload one file and return its outcome.

        Validation failures are returned without touching the network.
        Transport and server failures are returned as well; nothing is retried.

        Raises:
            UploaderBusyError: if a previous upload has not finished yet.
        """
        if self._busy:
            raise UploaderBusyError(
                f"Cannot upload {candidate.filename}: another upload is in progress"
            )
        try:
            self.validate(candidate)
        except UploadError as exc:
            Log.warning(f"Rejected {candidate.filename}: {exc}")
            return UploadOutcome(error=exc)

        self._busy = True
        self._progress = f"Uploading {candidate.filename}..."
        Log.info(f"Uploading {candidate.filename} ({candidate.size} bytes)")
        try:
            document = await self._api.upload_document(
                candidate.filename, candidate.content, candidate.content_type
            )
        except DocumentApiError as exc:
            self._clear()
            Log.error(f"Upload of {candidate.filename} failed: {exc}")
            return UploadOutcome(error=exc)
        except BaseException:
            self._clear()
            raise

        self._progress = self.SUCCESS_LABEL
        Log.info(f"Uploaded {candidate.filename} as document {document.id} ({document.status})")
        self._schedule_reset()
        return UploadOutcome(document=document)

    async def close(self) -> None:
        """Cancel a pending reset and clear busy state."""
        task = self._reset_task
        self._cancel_reset()
        if task is not None:
            with contextlib.suppress(asyncio.CancelledError):
                await task
        self._clear()

    def _schedule_reset(self) -> None:
        delay = self._settings.upload_reset_delay_seconds
        if delay <= 0:
            self._clear()
            return
        self._reset_task = asyncio.create_task(self._reset_after(delay))

    async def _reset_after(self, delay: float) -> None:
        await asyncio.sleep(delay)
        self._reset_task = None
        self._clear()

    def _cancel_reset(self) -> None:
        if self._reset_task is not None:
            self._reset_task.cancel()
            self._reset_task = None

    def _clear(self) -> None:
        self._busy = False
        self._progress = ""
