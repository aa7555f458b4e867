"""Release notes generation module."""

from .exceptions import (
    AggregationError,
    ConfigurationError,
    DefaultBranchReleaseCandidateError,
    ExternalSourceError,
    InvalidModeError,
    InvalidReleaseCandidatePatternError,
    LorekeeperError,
    NoPullRequestsFoundError,
    NoReferenceFoundError,
    PullRequestFetchError,
    ResolutionError,
    TagNotFoundError,
    UnknownModeError,
)
from .models import (
    Author,
    Commit,
    PullRequest,
    Reference,
    ReleaseNotesResult,
    ReleaseNotesStatus,
    Resolution,
)
from .modes import Mode, get_mode_by_name, list_modes

__all__ = [
    "AggregationError",
    "Author",
    "Commit",
    "ConfigurationError",
    "DefaultBranchReleaseCandidateError",
    "ExternalSourceError",
    "InvalidModeError",
    "InvalidReleaseCandidatePatternError",
    "LorekeeperError",
    "Mode",
    "NoPullRequestsFoundError",
    "NoReferenceFoundError",
    "PullRequest",
    "PullRequestFetchError",
    "Reference",
    "ReleaseNotesResult",
    "ReleaseNotesStatus",
    "Resolution",
    "ResolutionError",
    "TagNotFoundError",
    "UnknownModeError",
    "get_mode_by_name",
    "list_modes",
]
