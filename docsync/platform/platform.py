import httpx

from docsync.api.client import DocumentApiClient
from docsync.config.settings import Settings
from docsync.documents.models import Document
from docsync.logging.logger import Log
from docsync.sync.synchronizer import DocumentSynchronizer
from docsync.upload.models import UploadCandidate, UploadOutcome
from docsync.upload.submitter import UploadSubmitter


class DocumentPlatform:
    """Connects the upload path to the synchronizer.

    Flow: upload -> (success) -> change signal -> refresh. The synchronizer
    also polls on its own, independent of uploads.
    """

    def __init__(
        self,
        api: DocumentApiClient,
        submitter: UploadSubmitter,
        synchronizer: DocumentSynchronizer,
    ) -> None:
        self._api = api
        self._submitter = submitter
        self._synchronizer = synchronizer
        self._uploads = 0
        self._statuses: dict[int, str] = {}
        synchronizer.add_listener(self._log_transitions)

    @property
    def api(self) -> DocumentApiClient:
        return self._api

    @property
    def submitter(self) -> UploadSubmitter:
        return self._submitter

    @property
    def synchronizer(self) -> DocumentSynchronizer:
        return self._synchronizer

    async def __aenter__(self) -> "DocumentPlatform":
        await self.start()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.stop()

    async def start(self) -> None:
        await self._synchronizer.start()

    async def stop(self) -> None:
        """Stop polling, let in-flight fetches settle, then close the HTTP client."""
        await self._synchronizer.stop()
        await self._synchronizer.drain()
        await self._submitter.close()
        await self._api.aclose()

    async def upload(self, candidate: UploadCandidate) -> UploadOutcome:
        """Submit one file; a successful upload triggers one refresh."""
        outcome = await self._submitter.submit(candidate)
        if outcome.succeeded:
            self._uploads += 1
            self._synchronizer.notify_changed(self._uploads)
        return outcome

    def _log_transitions(self, documents: tuple[Document, ...]) -> None:
        seen: dict[int, str] = {}
        for document in documents:
            previous = self._statuses.get(document.id)
            if previous is None:
                Log.info(f"Document {document.id} ({document.filename}): {document.status}")
            elif previous != document.status:
                Log.info(
                    f"Document {document.id} ({document.filename}): "
                    f"{previous} -> {document.status}"
                )
            seen[document.id] = document.status
        for document_id in self._statuses.keys() - seen.keys():
            Log.info(f"Document {document_id} is no longer listed")
        self._statuses = seen


def build_platform(
    settings: Settings, transport: httpx.AsyncBaseTransport | None = None
) -> DocumentPlatform:
    """Build the API client, submitter and synchronizer from settings."""
    api = DocumentApiClient(
        base_url=settings.api_base_url,
        timeout_seconds=settings.request_timeout_seconds,
        transport=transport,
    )
    return DocumentPlatform(
        api,
        UploadSubmitter(api, settings),
        DocumentSynchronizer(api, settings),
    )
