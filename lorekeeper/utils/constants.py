"""Shared constants used across the application."""

import re

# Release Notes Constants
# -----------------------

DEFAULT_RELEASE_CANDIDATE_REGEX = r"-rc"
"""Default pattern identifying release candidate tags (e.g., v1.2.0-rc1)."""

AVATAR_VERSION_PATTERN = re.compile(r"(v=[0-9]+)")
"""Pattern to match the version query parameter of GitHub avatar URLs."""

AVATAR_SIZE = 64
"""Avatar size, in pixels, requested for authors in the rendered notes."""

# GitHub Constants
# ----------------

DEFAULT_GITHUB_API_URL = "https://api.github.com"
"""Default GitHub API URL."""

SEARCH_PAGE_SIZE = 100
"""Results requested per page from the GitHub REST API."""

SEARCH_RESULT_LIMIT = 1000
"""Most results the GitHub search API returns for a single query."""

GRAPHQL_PAGE_SIZE = 100
"""Nodes requested per page from the GitHub GraphQL API."""

SEARCH_TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"
"""UTC timestamp format used in GitHub search date qualifiers."""

# Git Constants
# -------------

TAG_REF_FORMAT = "%(creatordate:iso-strict)%09%(refname:short)"
"""`git for-each-ref` format: creator date and short tag name, tab separated."""

BRANCH_REF_PREFIX = "refs/heads/"
"""Prefix of fully qualified branch references."""

DETACHED_HEAD = "HEAD"
"""What `git rev-parse --abbrev-ref HEAD` prints when no branch is checked out."""
