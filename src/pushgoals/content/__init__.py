"""Project content accessors implementing the ProjectContent protocol."""

from pushgoals.content.memory import InMemoryProject
from pushgoals.content.local import LocalProject
from pushgoals.content.http import HttpProject

__all__ = ["InMemoryProject", "LocalProject", "HttpProject"]
