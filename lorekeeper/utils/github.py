"""Contains utility functions for GitHub repository names."""

import re

from lorekeeper.configuration.exceptions import InvalidRepositoryError

REMOTE_URL_PATTERN = re.compile(r"^(?:[a-z+]+://)?(?:[^@/]+@)?[^:/]+(?::\d+)?[:/](?P<owner>[^/]+)/(?P<repo>[^/]+?)(?:\.git)?/?$")
"""Pattern to match SSH, scp-like and HTTPS remote URLs ending in owner/repo."""


def split_repository(repo: str | None) -> tuple[str, str]:
    """Splits a repository in 'owner/repo' format into owner and repository."""
    if repo is None:
        raise InvalidRepositoryError("A repository is required to query GitHub.")
    repo = repo.strip("/")
    parts = repo.split("/")
    if len(parts) != 2 or not all(parts):
        raise InvalidRepositoryError("Repository must be in the format 'owner/repo' with no leading/trailing slashes or extra parts.")
    owner, repository = parts
    return owner, repository


def repository_from_remote_url(url: str) -> str:
    """Extracts 'owner/repo' from a git remote URL (e.g., git@github.com:owner/repo.git)."""
    match = REMOTE_URL_PATTERN.match(url.strip())
    if match is None:
        raise InvalidRepositoryError(f"Cannot determine the GitHub repository from remote URL {url!r}.")
    return f"{match['owner']}/{match['repo']}"
