"""Data models for release notes generation."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, model_validator

from ..utils.constants import AVATAR_SIZE, AVATAR_VERSION_PATTERN
from .modes import Mode


class ReleaseNotesStatus(str, Enum):
    """Status of release notes generation."""

    SUCCESS = "success"


class Reference(BaseModel):
    """A release or tag, used as the "merged after" point for pull requests."""

    published_at: datetime
    tag_name: str = Field(min_length=1)


class Author(BaseModel):
    """A commit author as reported by GitHub."""

    login: str = Field(min_length=1)
    avatar_url: str = ""

    @property
    def sized_avatar_url(self) -> str:
        """The avatar URL rewritten to request a 64px image."""
        return AVATAR_VERSION_PATTERN.sub(rf"s={AVATAR_SIZE}&\1", self.avatar_url)


class Commit(BaseModel):
    """A pull request commit and its (co-)authors."""

    authors: list[Author] = Field(default_factory=list)


class PullRequest(BaseModel):
    """A merged (or open) pull request with its commits."""

    number: int = Field(gt=0)
    title: str
    body: str = ""
    commits: list[Commit] = Field(default_factory=list)

    @property
    def authors(self) -> list[Author]:
        """Authors of every commit, in commit order. Repeated authors are kept."""
        return [author for commit in self.commits for author in commit.authors]


class Resolution(BaseModel):
    """Where to look for the pull requests of a release.

    Either a single pull request located through the tag's commit, or a cutoff
    reference after which every merged pull request qualifies.
    """

    mode: Mode
    cutoff: Reference | None = None
    commit_sha: str | None = None
    pull_request_number: int | None = None

    @model_validator(mode="after")
    def _check_exclusive(self) -> "Resolution":
        if (self.cutoff is None) == (self.commit_sha is None):
            raise ValueError("a resolution needs either a cutoff reference or a commit SHA")
        return self

    @property
    def is_single_pull_request(self) -> bool:
        """Whether the release notes cover exactly the pull request of one commit."""
        return self.cutoff is None


class ReleaseNotesResult(BaseModel):
    """Result of release notes generation."""

    status: ReleaseNotesStatus
    mode: Mode
    cutoff: Reference | None = None
    pull_request_numbers: list[int] = Field(default_factory=list)
