"""Project content backed by a local repository checkout."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from pushgoals.exceptions import ContentAccessError

logger = logging.getLogger(__name__)


class LocalProject:
    """Reads project files from a directory on disk.

    Paths are relative to *root*; paths escaping the root are rejected.
    File I/O runs in a worker thread so it never blocks the event loop.
    """

    def __init__(self, root: str | Path, encoding: str = "utf-8") -> None:
        self._root = Path(root).resolve()
        self._encoding = encoding
        if not self._root.is_dir():
            raise ContentAccessError(str(root), "not a directory")

    @property
    def root(self) -> Path:
        return self._root

    def _path(self, path: str) -> Path:
        candidate = (self._root / path).resolve()
        if candidate != self._root and self._root not in candidate.parents:
            raise ContentAccessError(path, "path escapes the project root")
        return candidate

    async def file_exists(self, path: str) -> bool:
        return await asyncio.to_thread(self._path(path).is_file)

    async def get_content(self, path: str) -> str | None:
        target = self._path(path)
        try:
            return await asyncio.to_thread(target.read_text, self._encoding)
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as exc:
            raise ContentAccessError(path, str(exc)) from exc
