"""Reference source backed by the local git repository and the GitHub API."""

import re
from datetime import datetime

from lorekeeper.git.repository import LocalGitRepository
from lorekeeper.github.abc import ReferenceSourceBase
from lorekeeper.github.adapter import GitHubKitAdapter

from .models import PullRequest, Reference


class RepositoryReferenceSource(ReferenceSourceBase):
    """Tags and tag commits come from git, releases and pull requests from GitHub."""

    def __init__(self, git: LocalGitRepository, github: GitHubKitAdapter) -> None:
        """Initialize with the local repository and the GitHub adapter for its remote."""
        self.git = git
        self.github = github

    async def resolve_commit_for_tag(self, tag_name: str) -> str:
        """Get the SHA of the commit a tag points at."""
        return await self.git.resolve_commit_for_tag(tag_name)

    async def list_tags(self, exclude: re.Pattern[str] | None = None) -> list[Reference]:
        """List local tags, newest first."""
        return await self.git.list_tags(exclude=exclude)

    async def list_releases(self) -> list[Reference]:
        """List GitHub releases, newest first."""
        return await self.github.list_releases()

    async def find_pull_request_by_commit(self, commit_sha: str) -> int | None:
        """Get the GitHub pull request containing a commit."""
        return await self.github.find_pull_request_by_commit(commit_sha)

    async def list_merged_pull_requests(self, after: datetime) -> list[int]:
        """List GitHub pull requests merged after a point in time."""
        return await self.github.list_merged_pull_requests(after)

    async def get_pull_request(self, number: int) -> PullRequest:
        """Get a GitHub pull request with its commits."""
        return await self.github.get_pull_request(number)
