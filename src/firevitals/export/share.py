"""Delivery of export files: share hand-off and download fallback."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

import aiohttp

from firevitals.exceptions import FireVitalsExportError, ShareError

_logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ExportFile:
    """A named, typed in-memory file payload."""

    name: str
    content_type: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)


class ShareTarget(Protocol):
    """Structural interface for a native file-sharing hand-off.

    ``share`` reports whether the hand-off was *accepted*, not whether the
    user finished sharing. It may also raise; callers treat both a
    rejection and an exception as "fall back to downloads".
    """

    def can_share(self, files: Sequence[ExportFile]) -> bool: ...

    async def share(self, files: Sequence[ExportFile], title: str) -> bool:
        """Upload *files*; a non-2xx answer raises :class:`ShareError` with its ``status_code``."""
        ...


class Downloader(Protocol):
    """Structural interface for saving one file where the user can find it."""

    def download(self, file: ExportFile) -> Path: ...


class HttpShareTarget:
    """Share by uploading all files in a single multipart request.

    One request carries every file, so the receiving side gets either the
    complete export or nothing.
    """

    def __init__(
        self,
        url: str,
        *,
        session: aiohttp.ClientSession | None = None,
        timeout: float = 30.0,
    ) -> None:
        self._url = url
        self._session = session
        self._timeout = aiohttp.ClientTimeout(total=timeout)

    def can_share(self, files: Sequence[ExportFile]) -> bool:
        return bool(self._url) and bool(files)

    async def share(self, files: Sequence[ExportFile], title: str) -> bool:
        """Upload *files*; a non-2xx answer raises :class:`ShareError` with its ``status_code``."""
        form = aiohttp.FormData()
        form.add_field("title", title)
        for file in files:
            form.add_field("files", file.data, filename=file.name, content_type=file.content_type)

        own_session = self._session is None
        session = self._session or aiohttp.ClientSession(timeout=self._timeout)
        try:
            _logger.debug("POST %s (%d files)", self._url, len(files))
            async with session.post(self._url, data=form, timeout=self._timeout) as resp:
                if 200 <= resp.status < 300:
                    return True
                raise ShareError(
                    f"Share endpoint rejected export with HTTP {resp.status}",
                    status_code=resp.status,
                )
        except aiohttp.ClientError as exc:
            raise ShareError(f"Share upload to {self._url} failed: {exc}") from exc
        except TimeoutError as exc:
            raise ShareError(f"Share upload to {self._url} timed out") from exc
        finally:
            if own_session:
                await session.close()


class DirectoryDownloader:
    """Save files into a directory, overwriting earlier exports of the same name."""

    def __init__(self, directory: Path | str) -> None:
        self._directory = Path(directory)

    @property
    def directory(self) -> Path:
        return self._directory

    def download(self, file: ExportFile) -> Path:
        path = self._directory / Path(file.name).name
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            path.write_bytes(file.data)
        except OSError as exc:
            raise FireVitalsExportError(f"Could not save {path}: {exc}") from exc
        _logger.info("Saved %s (%d bytes)", path, file.size)
        return path
