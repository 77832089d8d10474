"""Keep the runner metadata index current while sources change."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any

from watchfiles import awatch

from runner_directives.core.config import ExtractSettings
from runner_directives.core.extract import MetadataWriteError, run_extract
from runner_directives.core.files import is_excluded
from runner_directives.core.languages import is_supported_path
from runner_directives.models import FileMetadata

logger = logging.getLogger(__name__)

ExtractedCallback = Callable[[set[Path], list[FileMetadata], Path], None]


class ExtractionWatcher:
    """Re-run metadata extraction when a runner source below ``settings.cwd`` changes.

    Changed paths are judged relative to the watched root, so a project that
    itself lives under ``dist/`` or ``node_modules/`` is still watched.
    Extraction runs in a worker thread to keep the event loop free.
    """

    def __init__(self, settings: ExtractSettings, on_extracted: ExtractedCallback | None = None) -> None:
        self._settings = settings
        self._root = Path(settings.cwd).resolve()
        self._on_extracted = on_extracted
        self._task: asyncio.Task[None] | None = None

    @property
    def root(self) -> Path:
        return self._root

    def relevant_changes(self, changes: Iterable[tuple[Any, str]]) -> set[Path]:
        """Paths from a watchfiles change set that can affect the index."""
        relevant: set[Path] = set()
        for _, raw in changes:
            path = Path(raw)
            if not is_supported_path(path):
                continue
            try:
                relative = path.resolve().relative_to(self._root)
            except ValueError:
                continue
            if not is_excluded(relative):
                relevant.add(path)
        return relevant

    async def extract(self, changed: set[Path]) -> bool:
        settings = self._settings
        try:
            metadata, output_path = await asyncio.to_thread(
                run_extract, settings.patterns, settings.output, cwd=settings.cwd, workers=settings.workers
            )
        except MetadataWriteError as exc:
            logger.error("Re-extraction after %d changed file(s) failed: %s", len(changed), exc)
            return False
        logger.info("Re-extracted metadata from %d file(s) into %s", len(metadata), output_path)
        if self._on_extracted is not None:
            self._on_extracted(changed, metadata, output_path)
        return True

    async def start(self) -> None:
        if self._task is None:
            self._task = asyncio.create_task(self._watch())
            logger.info("Watching %s", self._root)

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
        logger.info("Stopped watching %s", self._root)

    async def wait(self) -> None:
        if self._task is not None:
            await self._task

    async def _watch(self) -> None:
        async for changes in awatch(self._root):
            changed = self.relevant_changes(changes)
            if changed:
                logger.debug("Changes in %d file(s): %s", len(changed), sorted(map(str, changed)))
                await self.extract(changed)
