import argparse
import asyncio
from collections.abc import Sequence
from pathlib import Path

from docsync.config.settings import Settings
from docsync.logging.logger import Log
from docsync.platform.platform import DocumentPlatform, build_platform
from docsync.presentation.views import render_table
from docsync.upload.models import UploadCandidate


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="docsync",
        description="Upload documents and follow their processing status.",
    )
    parser.add_argument("files", nargs="*", type=Path, help="JPG, PNG or PDF files to upload")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--once", action="store_true", help="refresh once, print the list and exit"
    )
    mode.add_argument(
        "--until-settled",
        action="store_true",
        help="exit once every document is COMPLETED or FAILED",
    )
    return parser.parse_args(argv)


async def run(
    settings: Settings, args: argparse.Namespace, platform: DocumentPlatform | None = None
) -> int:
    """Upload the given files, then watch the collection. Returns an exit code."""
    platform = platform or build_platform(settings)
    failures = 0
    async with platform:
        if not await platform.api.check_health(settings.health_url):
            Log.warning(f"Gateway at {settings.health_url} is not healthy")

        for path in args.files:
            try:
                candidate = UploadCandidate.from_path(path)
            except OSError as exc:
                Log.error(f"Cannot read {path}: {exc}")
                failures += 1
                continue
            outcome = await platform.upload(candidate)
            if not outcome.succeeded:
                Log.error(outcome.message)
                failures += 1
            await _wait_until_idle(platform)

        synchronizer = platform.synchronizer
        await synchronizer.drain()
        if args.once:
            await synchronizer.refresh()
        _print_table(platform)
        while not (args.once or (args.until_settled and _settled(platform))):
            await asyncio.sleep(settings.refresh_interval_seconds)
            _print_table(platform)
    return 1 if failures else 0


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point: settings -> logging -> platform -> upload/watch loop."""
    settings = Settings()
    Log.configure(settings.log_level)
    args = parse_args(argv)
    try:
        return asyncio.run(run(settings, args))
    except KeyboardInterrupt:
        Log.info("Client shutting down gracefully")
        return 0


async def _wait_until_idle(platform: DocumentPlatform) -> None:
    while platform.submitter.busy:
        await asyncio.sleep(0.1)


def _print_table(platform: DocumentPlatform) -> None:
    synchronizer = platform.synchronizer
    print(
        render_table(
            synchronizer.documents,
            loading=synchronizer.loading,
            error=synchronizer.error,
        ),
        flush=True,
    )


def _settled(platform: DocumentPlatform) -> bool:
    synchronizer = platform.synchronizer
    return synchronizer.error is None and all(
        document.is_terminal for document in synchronizer.documents
    )


if __name__ == "__main__":
    raise SystemExit(main())
