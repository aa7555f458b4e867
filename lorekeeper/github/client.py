# This file is intended to hold the setup for the githubkit client.

"""Sets up the githubkit client."""

from typing import TypeAlias

from githubkit import GitHub
from githubkit.auth import TokenAuthStrategy, UnauthAuthStrategy

GitHubClient: TypeAlias = GitHub[TokenAuthStrategy] | GitHub[UnauthAuthStrategy]


def get_github_client(github_token: str | None, github_api_url: str) -> GitHubClient:
    """Returns a GitHub client, authenticated with the token when one is given.

    Supports custom base URL for GitHub Enterprise Server (GHES).
    """
    if github_token:
        # Disable HTTP caching to always get fresh data
        return GitHub(auth=TokenAuthStrategy(github_token), base_url=github_api_url, http_cache=False)
    return GitHub(auth=UnauthAuthStrategy(), base_url=github_api_url, http_cache=False)
