"""GitHub client adapter for the githubkit library."""

from datetime import datetime, timezone
from functools import wraps
from typing import Any, Awaitable, Callable, Self, TypeVar

import structlog
from githubkit import Response
from githubkit.exception import GitHubException
from githubkit.versions.latest.models import FullRepository, SearchIssuesGetResponse200, Release
from pydantic import ValidationError

from lorekeeper.release_notes.exceptions import ExternalSourceError
from lorekeeper.release_notes.models import Author, Commit, PullRequest, Reference
from lorekeeper.utils.constants import DEFAULT_GITHUB_API_URL, GRAPHQL_PAGE_SIZE, SEARCH_PAGE_SIZE, SEARCH_RESULT_LIMIT, SEARCH_TIMESTAMP_FORMAT
from lorekeeper.utils.github import split_repository

from .client import GitHubClient, get_github_client

logger = structlog.get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])

PULL_REQUEST_QUERY = """
query($owner: String!, $repo: String!, $number: Int!, $first: Int!, $after: String) {
  repository(owner: $owner, name: $repo) {
    pullRequest(number: $number) {
      number
      title
      body
      commits(first: $first, after: $after) {
        pageInfo {
          hasNextPage
          endCursor
        }
        nodes {
          commit {
            authors(first: $first) {
              nodes {
                name
                email
                avatarUrl
                user {
                  login
                }
              }
            }
          }
        }
      }
    }
  }
}
"""


def handle_github_errors(operation: str) -> Callable[[F], F]:
    """Decorator turning githubkit failures and malformed payloads into ExternalSourceError."""

    def decorator(func: F) -> F:
        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return await func(*args, **kwargs)
            except GitHubException as exc:
                logger.error("GitHub request failed", function=func.__name__, operation=operation, error=str(exc))
                raise ExternalSourceError(operation, exc) from exc
            except (ValidationError, KeyError, TypeError) as exc:
                logger.error("Malformed GitHub response", function=func.__name__, operation=operation, error=str(exc))
                raise ExternalSourceError(operation, f"malformed response: {exc}") from exc

        return wrapper  # type: ignore

    return decorator


class GitHubKitAdapter:
    """GitHub client adapter for the githubkit library."""

    def __init__(self, client: GitHubClient, owner: str, repo_name: str) -> None:
        """Initialize the GitHub client adapter with an already-initialized client."""
        self.client = client
        self.owner = owner
        self.repo_name = repo_name

    @classmethod
    def create(cls, repo: str, github_token: str | None = None, github_api_url: str = DEFAULT_GITHUB_API_URL) -> Self:
        """Create a new GitHub client adapter.

        Args:
            repo: Repository in 'owner/repo' format
            github_token: Token passed through to the API, anonymous access when None
            github_api_url: GitHub API URL (defaults to https://api.github.com)

        Returns:
            Configured GitHubKitAdapter instance
        """
        owner, repo_name = split_repository(repo)
        logger.info(
            "Creating client for GitHub instance and repository",
            github_api_url=github_api_url,
            owner=owner,
            repo_name=repo_name,
        )
        return cls(get_github_client(github_token, github_api_url), owner, repo_name)

    @property
    def full_name(self) -> str:
        """The repository in 'owner/repo' format."""
        return f"{self.owner}/{self.repo_name}"

    # Repository Operations
    @handle_github_errors("get repository")
    async def get_default_branch(self) -> str:
        """Get the name of the repository's default branch."""
        response: Response[FullRepository] = await self.client.rest.repos.async_get(owner=self.owner, repo=self.repo_name)
        return response.parsed_data.default_branch

    # Release Operations
    @handle_github_errors("list releases")
    async def list_releases(self, per_page: int = SEARCH_PAGE_SIZE) -> list[Reference]:
        """List published releases, handling pagination.

        GitHub returns releases newest first. Drafts carry no publish date and
        are skipped.
        """
        logger.debug("Fetching releases", owner=self.owner, repo=self.repo_name, per_page=per_page)
        references: list[Reference] = []
        page: int = 1
        while True:
            response: Response[list[Release]] = await self.client.rest.repos.async_list_releases(
                owner=self.owner,
                repo=self.repo_name,
                per_page=per_page,
                page=page,
            )
            releases: list[Release] = response.parsed_data
            logger.debug(f"Got {len(releases)} releases on page {page}")

            for release in releases:
                if release.draft or release.published_at is None:
                    logger.debug("Skipping draft release", tag_name=release.tag_name)
                    continue
                references.append(Reference(published_at=release.published_at, tag_name=release.tag_name))

            if len(releases) < per_page:
                break
            page += 1

        logger.info(f"Total releases found: {len(references)}")
        return references

    # Pull Request Operations
    async def _search_pull_request_numbers(self, qualifiers: str, per_page: int = SEARCH_PAGE_SIZE) -> list[int]:
        """Search the repository's pull requests, newest created first, handling pagination."""
        query = f"repo:{self.full_name} is:pr {qualifiers}"
        logger.debug("Searching pull requests", query=query)
        numbers: list[int] = []
        page: int = 1
        while True:
            response: Response[SearchIssuesGetResponse200] = await self.client.rest.search.async_issues_and_pull_requests(
                q=query,
                sort="created",
                order="desc",
                per_page=per_page,
                page=page,
            )
            items = response.parsed_data.items
            total_count = response.parsed_data.total_count
            numbers.extend(item.number for item in items)
            if len(items) < per_page or len(numbers) >= total_count:
                break
            if page * per_page >= SEARCH_RESULT_LIMIT:
                logger.warning(
                    "Search matched more pull requests than GitHub returns, the oldest are missing",
                    query=query,
                    total_count=total_count,
                    returned=len(numbers),
                    limit=SEARCH_RESULT_LIMIT,
                )
                break
            page += 1
        return numbers

    @handle_github_errors("find pull request by commit")
    async def find_pull_request_by_commit(self, commit_sha: str) -> int | None:
        """Get the number of the newest pull request containing a commit."""
        numbers = await self._search_pull_request_numbers(f"sha:{commit_sha}")
        if not numbers:
            logger.warning("No pull request contains commit", sha=commit_sha)
            return None
        if len(numbers) > 1:
            logger.info("Several pull requests contain commit, using the newest", sha=commit_sha, pull_requests=numbers)
        return numbers[0]

    @handle_github_errors("list merged pull requests")
    async def list_merged_pull_requests(self, after: datetime) -> list[int]:
        """List the numbers of pull requests merged after a point in time, newest first."""
        if after.tzinfo is None:
            after = after.replace(tzinfo=timezone.utc)
        timestamp = after.astimezone(timezone.utc).strftime(SEARCH_TIMESTAMP_FORMAT)
        numbers = await self._search_pull_request_numbers(f"is:merged merged:>{timestamp}")
        logger.info("Found merged pull requests", after=timestamp, count=len(numbers))
        return numbers

    @handle_github_errors("get pull request")
    async def get_pull_request(self, number: int) -> PullRequest:
        """Get a pull request with every commit and each commit's (co-)authors."""
        commits: list[Commit] = []
        pull_request: dict[str, Any] = {}
        cursor: str | None = None
        while True:
            data: dict[str, Any] = await self.client.async_graphql(
                PULL_REQUEST_QUERY,
                variables={
                    "owner": self.owner,
                    "repo": self.repo_name,
                    "number": number,
                    "first": GRAPHQL_PAGE_SIZE,
                    "after": cursor,
                },
            )
            pull_request = data["repository"]["pullRequest"]
            if pull_request is None:
                raise ExternalSourceError("get pull request", f"pull request #{number} not found in {self.full_name}")

            for node in pull_request["commits"]["nodes"]:
                authors = (_author_from_node(author) for author in node["commit"]["authors"]["nodes"])
                commits.append(Commit(authors=[author for author in authors if author is not None]))

            page_info = pull_request["commits"]["pageInfo"]
            if not page_info["hasNextPage"]:
                break
            cursor = page_info["endCursor"]

        logger.debug("Fetched pull request", number=number, commit_count=len(commits))
        return PullRequest(
            number=pull_request["number"],
            title=pull_request["title"],
            body=pull_request["body"] or "",
            commits=commits,
        )


def _author_from_node(node: dict[str, Any]) -> Author | None:
    """Build an Author from a GraphQL GitActor node.

    Commits whose author has no GitHub account fall back to the git name, then
    the email. An actor with none of these is skipped.
    """
    user = node.get("user") or {}
    login = user.get("login") or node.get("name") or node.get("email")
    if not login:
        logger.warning("Skipping commit author without login, name or email", node=node)
        return None
    return Author(login=login, avatar_url=node.get("avatarUrl") or "")
