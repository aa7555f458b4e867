"""Base ABC for release reference sources."""

import re
from abc import ABC, abstractmethod
from datetime import datetime

from lorekeeper.release_notes.models import PullRequest, Reference


class ReferenceSourceBase(ABC):
    """Base ABC for the sources of tags, releases and pull requests.

    Lists are returned newest first. Implementations raise ExternalSourceError
    when the underlying tool or API fails.
    """

    # Tag Operations
    @abstractmethod
    async def resolve_commit_for_tag(self, tag_name: str) -> str:
        """Get the SHA of the commit a tag points at, raising TagNotFoundError if absent."""
        pass

    @abstractmethod
    async def list_tags(self, exclude: re.Pattern[str] | None = None) -> list[Reference]:
        """List tags by creation date, newest first, leaving out names matching `exclude`."""
        pass

    # Release Operations
    @abstractmethod
    async def list_releases(self) -> list[Reference]:
        """List published releases, newest first."""
        pass

    # Pull Request Operations
    @abstractmethod
    async def find_pull_request_by_commit(self, commit_sha: str) -> int | None:
        """Get the number of the pull request containing a commit, if any."""
        pass

    @abstractmethod
    async def list_merged_pull_requests(self, after: datetime) -> list[int]:
        """List the numbers of pull requests merged strictly after a point in time, newest first."""
        pass

    @abstractmethod
    async def get_pull_request(self, number: int) -> PullRequest:
        """Get a pull request with its commits and their authors."""
        pass
