"""Local Git repository access."""

from .repository import LocalGitRepository

__all__ = ["LocalGitRepository"]
