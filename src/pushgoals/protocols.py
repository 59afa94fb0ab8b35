"""Protocol definitions for pushgoals.

Defines the narrow, read-only project content capability that push tests use
to inspect a repository. Implementations live in ``pushgoals.content``.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ProjectContent(Protocol):
    """Read-only access to the files of the pushed project.

    Backed by a repository checkout, an in-memory mapping, or a hosting API.
    Implementations own any retry policy; the engine never retries.
    """

    async def file_exists(self, path: str) -> bool:
        """Return True if *path* exists in the project."""
        ...

    async def get_content(self, path: str) -> str | None:
        """Return the text content of *path*, or None if it does not exist."""
        ...
