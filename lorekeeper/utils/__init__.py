"""Utility modules for shared functionality."""

from .constants import (
    AVATAR_SIZE,
    AVATAR_VERSION_PATTERN,
    DEFAULT_GITHUB_API_URL,
    DEFAULT_RELEASE_CANDIDATE_REGEX,
)

__all__ = [
    "AVATAR_SIZE",
    "AVATAR_VERSION_PATTERN",
    "DEFAULT_GITHUB_API_URL",
    "DEFAULT_RELEASE_CANDIDATE_REGEX",
]
