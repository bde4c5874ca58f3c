"""Export orchestration: build both artifacts, share them, or download them."""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, tzinfo
from enum import StrEnum
from pathlib import Path
from urllib.parse import quote

import aiohttp

from firevitals._constants import CSV_CONTENT_TYPE, EXPORT_TITLE, PDF_CONTENT_TYPE, TIME_FORMAT
from firevitals.config import FireVitalsConfig
from firevitals.export.report import build_report
from firevitals.export.share import DirectoryDownloader, Downloader, ExportFile, HttpShareTarget, ShareTarget
from firevitals.export.table import build_table
from firevitals.models import Scene

_logger = logging.getLogger(__name__)

_SLUG_UNSAFE = re.compile(r"[^a-z0-9]+")


class ExportMethod(StrEnum):
    SHARE = "share"
    DOWNLOAD = "download"


@dataclass(frozen=True, slots=True)
class ExportResult:
    method: ExportMethod
    base_name: str
    files: tuple[ExportFile, ...]
    paths: tuple[Path, ...] = field(default=())
    """Where the download fallback saved each file; empty after a share."""


@dataclass(frozen=True, slots=True)
class EmailDraft:
    """Subject and body for a mail draft. Files are never attached."""

    subject: str
    body: str

    @property
    def mailto_url(self) -> str:
        return f"mailto:?subject={quote(self.subject)}&body={quote(self.body)}"


def slugify(name: str) -> str:
    return _SLUG_UNSAFE.sub("-", name.lower()).strip("-") or "scene"


def export_basename(scene_name: str, exported_at: datetime) -> str:
    """Shared file stem, e.g. ``warehouse-fire-vitals-2026-10-19``."""
    return f"{slugify(scene_name)}-vitals-{exported_at.date().isoformat()}"


class ExportPipeline:
    """Build the CSV table and PDF report for a scene and deliver them.

    Delivery first offers both files to the share target as one hand-off.
    Whatever goes wrong there, the pipeline downloads the table and then
    the report, so an export never leaves the user with nothing.
    """

    def __init__(
        self,
        downloader: Downloader,
        *,
        share_target: ShareTarget | None = None,
        title: str = EXPORT_TITLE,
        tz: tzinfo | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._downloader = downloader
        self._share_target = share_target
        self._title = title
        self._tz = tz
        self._clock = clock or (lambda: datetime.now(tz=self._tz))

    @classmethod
    def from_config(
        cls,
        config: FireVitalsConfig,
        *,
        session: aiohttp.ClientSession | None = None,
    ) -> ExportPipeline:
        share_target: ShareTarget | None = None
        if config.can_share and config.share_url:
            share_target = HttpShareTarget(config.share_url, session=session)
        return cls(
            DirectoryDownloader(config.export_dir),
            share_target=share_target,
            title=config.share_title,
            tz=config.tzinfo,
        )

    def build_files(self, scene: Scene, exported_at: datetime) -> tuple[str, tuple[ExportFile, ExportFile]]:
        """Return the shared base name and the ``(table, report)`` files."""
        base_name = export_basename(scene.name, exported_at)
        table = build_table(scene.firefighters, scene.vitals, self._tz)
        report = build_report(
            scene.firefighters,
            scene.vitals,
            title=f"Firefighter Vitals - {scene.name}",
            exported_at=exported_at,
            tz=self._tz,
        )
        files = (
            ExportFile(f"{base_name}.csv", CSV_CONTENT_TYPE, table.encode("utf-8")),
            ExportFile(f"{base_name}.pdf", PDF_CONTENT_TYPE, report),
        )
        return base_name, files

    async def export_all(self, scene: Scene) -> ExportResult:
        exported_at = self._clock()
        base_name, files = self.build_files(scene, exported_at)

        if await self._try_share(files):
            _logger.info("Shared export %s", base_name)
            return ExportResult(ExportMethod.SHARE, base_name, files)

        # Table first, then report.
        paths = tuple(self._downloader.download(file) for file in files)
        return ExportResult(ExportMethod.DOWNLOAD, base_name, files, paths)

    async def _try_share(self, files: tuple[ExportFile, ...]) -> bool:
        target = self._share_target
        if target is None:
            return False
        try:
            if not target.can_share(files):
                _logger.debug("Share target cannot take these files; downloading instead")
                return False
            accepted = await target.share(files, self._title)
        except Exception as exc:  # noqa: BLE001
            _logger.warning("Share hand-off failed, downloading instead: %s", exc)
            return False
        if not accepted:
            _logger.info("Share hand-off declined; downloading instead")
        return bool(accepted)

    def compose_email_draft(self, scene: Scene | None = None) -> EmailDraft:
        """Draft an email asking the user to attach the downloaded exports by hand."""
        exported_at = self._clock()
        lines = ["Attached are the vitals exports (CSV + PDF)."]
        if scene is not None:
            base_name = export_basename(scene.name, exported_at)
            lines.append(f"Files: {base_name}.csv, {base_name}.pdf")
        lines.extend(
            [
                "",
                "Tip: if the files were downloaded, attach them from your downloads folder.",
                "",
                f"Export time: {exported_at.strftime(TIME_FORMAT)}",
            ]
        )
        return EmailDraft(subject=self._title, body="\n".join(lines))
