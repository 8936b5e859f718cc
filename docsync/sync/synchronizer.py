import asyncio
import contextlib
from collections.abc import Callable, Hashable

from docsync.api.client import DocumentApiClient
from docsync.api.exceptions import DocumentApiError
from docsync.config.settings import Settings
from docsync.documents.models import Document
from docsync.logging.logger import Log

Listener = Callable[[tuple[Document, ...]], None]


class DocumentSynchronizer:
    """Client-side mirror of the backend document collection.

    Refresh triggers: activation (once), a distinct change signal, and a
    recurring timer. Every refresh fetches the whole collection and replaces
    the held one; a failed fetch keeps the previous collection and sets
    ``error``. When refreshes overlap, the most recently issued one that
    succeeds wins; older responses arriving later are discarded.

    The timer sleeps for the interval after its previous fetch has finished,
    so against a slow backend the effective period is interval plus fetch time.
    """

    def __init__(self, api: DocumentApiClient, settings: Settings) -> None:
        self._api = api
        self._settings = settings
        self._documents: tuple[Document, ...] = ()
        self._error: str | None = None
        self._in_flight = 0
        self._issued = 0
        self._applied = 0
        self._active = False
        self._stopped = False
        self._last_signal: Hashable | None = None
        self._selected_id: int | None = None
        self._timer_task: asyncio.Task[None] | None = None
        self._pending: set[asyncio.Task[None]] = set()
        self._listeners: list[Listener] = []

    @property
    def documents(self) -> tuple[Document, ...]:
        return self._documents

    @property
    def loading(self) -> bool:
        return self._in_flight > 0

    @property
    def error(self) -> str | None:
        return self._error

    @property
    def active(self) -> bool:
        return self._active

    def add_listener(self, listener: Listener) -> None:
        """Register a callback invoked with the new collection after each replacement."""
        self._listeners.append(listener)

    async def start(self) -> None:
        """Activate: refresh once, then keep refreshing on the timer."""
        if self._stopped:
            raise RuntimeError("Synchronizer has been stopped and cannot be restarted")
        if self._active:
            return
        self._active = True
        Log.info(
            f"Document synchronizer started, refreshing every "
            f"{self._settings.refresh_interval_seconds}s"
        )
        await self.refresh()
        if self._active:
            self._timer_task = asyncio.create_task(self._poll())

    async def stop(self) -> None:
        """Tear down: cancel the timer; in-flight fetches are left to finish and discarded."""
        if self._stopped:
            return
        self._stopped = True
        self._active = False
        if self._timer_task is not None:
            self._timer_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._timer_task
            self._timer_task = None
        Log.info("Document synchronizer stopped")

    async def drain(self) -> None:
        """Wait for outstanding triggered fetches to settle."""
        if self._pending:
            await asyncio.gather(*self._pending, return_exceptions=True)

    async def refresh(self) -> None:
        """Fetch the whole collection and replace the held one.

        API failures set ``error`` and keep the previous collection; they are
        never raised to the caller.
        """
        if self._stopped:
            Log.debug("Refresh requested after stop, ignoring")
            return
        self._issued += 1
        ticket = self._issued
        self._in_flight += 1
        try:
            documents = await self._api.list_documents()
        except DocumentApiError as exc:
            if self._accepts(ticket):
                self._error = str(exc) or "Failed to load documents"
                Log.warning(f"Document refresh failed: {self._error}")
            return
        finally:
            self._in_flight -= 1

        if not self._accepts(ticket):
            Log.debug(f"Discarding stale refresh response (request {ticket})")
            return
        self._applied = ticket
        self._documents = tuple(documents)
        self._error = None
        Log.debug(f"Refreshed {len(self._documents)} documents")
        for listener in self._listeners:
            listener(self._documents)

    def notify_changed(self, signal: Hashable) -> asyncio.Task[None] | None:
        """Schedule a refresh for a new change signal (e.g. an upload counter).

        A falsy signal or one equal to the previous signal schedules nothing.
        """
        if not signal or signal == self._last_signal or self._stopped:
            return None
        self._last_signal = signal
        Log.debug(f"Change signal {signal!r}, scheduling refresh")
        return self._spawn_refresh()

    def get(self, document_id: int) -> Document | None:
        """Look up a document in the current collection; no network call."""
        for document in self._documents:
            if document.id == document_id:
                return document
        return None

    def select(self, document_id: int) -> Document | None:
        self._selected_id = document_id
        return self.get(document_id)

    def clear_selection(self) -> None:
        self._selected_id = None

    @property
    def selected(self) -> Document | None:
        """The focused document as of the latest refresh, if it still exists."""
        if self._selected_id is None:
            return None
        return self.get(self._selected_id)

    async def _poll(self) -> None:
        interval = self._settings.refresh_interval_seconds
        while not self._stopped:
            await asyncio.sleep(interval)
            # Cancelling the timer leaves an in-flight fetch running.
            await asyncio.wait([self._spawn_refresh()])

    def _spawn_refresh(self) -> asyncio.Task[None]:
        task = asyncio.create_task(self.refresh())
        self._pending.add(task)
        task.add_done_callback(self._refresh_done)
        return task

    def _refresh_done(self, task: asyncio.Task[None]) -> None:
        self._pending.discard(task)
        if not task.cancelled() and task.exception() is not None:
            Log.error(f"Refresh task crashed: {task.exception()}")

    def _accepts(self, ticket: int) -> bool:
        return not self._stopped and ticket > self._applied
