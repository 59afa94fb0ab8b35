"""In-memory project content, used by tests and by callers that already hold
the files of interest."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from types import MappingProxyType


class InMemoryProject:
    """Project content backed by a path -> text mapping.

    Example::

        project = InMemoryProject({"package.json": "{}"})
        project = InMemoryProject.with_files("Procfile", "manifest.yml")
    """

    def __init__(self, files: Mapping[str, str] | None = None) -> None:
        self._files = MappingProxyType(dict(files or {}))

    @classmethod
    def with_files(cls, *paths: str) -> InMemoryProject:
        """Create a project whose files exist with empty content."""
        return cls({path: "" for path in paths})

    @property
    def paths(self) -> Iterable[str]:
        return self._files.keys()

    async def file_exists(self, path: str) -> bool:
        return path in self._files

    async def get_content(self, path: str) -> str | None:
        return self._files.get(path)
