"""Exceptions raised while generating release notes.

Every failure is terminal. The CLI maps each category to its own exit code.
"""

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .models import Reference


class LorekeeperError(Exception):
    """Base class for all lorekeeper failures."""

    exit_code: int = 1


class ConfigurationError(LorekeeperError):
    """Raised when the run configuration is invalid, before any external call."""

    exit_code = 2


class UnknownModeError(ConfigurationError):
    """Raised when a mode name does not match any known mode."""

    def __init__(self, name: str, valid_names: list[str]) -> None:
        """Initializes the exception with the rejected name and the valid names."""
        super().__init__(f"invalid mode name: expected one of {', '.join(valid_names)}, got {name!r}")
        self.name = name
        self.valid_names = valid_names


class InvalidReleaseCandidatePatternError(ConfigurationError):
    """Raised when the release candidate pattern is not a valid regular expression."""

    def __init__(self, pattern: str, reason: str) -> None:
        """Initializes the exception with the pattern and the compiler's complaint."""
        super().__init__(f"invalid release candidate regex {pattern!r}: {reason}")
        self.pattern = pattern
        self.reason = reason


class ResolutionError(LorekeeperError):
    """Raised when the reference point for the release notes cannot be resolved."""

    exit_code = 3


class TagNotFoundError(ResolutionError):
    """Raised when the tag does not exist in the local repository."""

    def __init__(self, tag_name: str) -> None:
        """Initializes the exception with the missing tag name."""
        super().__init__(f"tag {tag_name!r} not found in repository")
        self.tag_name = tag_name


class InvalidModeError(ResolutionError):
    """Raised when something other than a known mode reaches resolution."""

    def __init__(self, mode: Any) -> None:
        """Initializes the exception with the offending mode value."""
        from .modes import list_modes

        expected = ", ".join(f"Mode.{m.name}" for m in list_modes())
        super().__init__(f"invalid mode: expected one of {expected}, got {mode!r}")
        self.mode = mode


class DefaultBranchReleaseCandidateError(ResolutionError):
    """Raised when a non release candidate tag is not on the default branch."""

    def __init__(self, tag_name: str, default_branch: str) -> None:
        """Initializes the exception with the tag and the default branch."""
        super().__init__(f"non-release candidate tags ({tag_name}) can only be on the default branch ({default_branch})")
        self.tag_name = tag_name
        self.default_branch = default_branch


class NoReferenceFoundError(ResolutionError):
    """Raised when no earlier release or tag exists to diff against."""

    def __init__(self, mode: Any, tag_name: str) -> None:
        """Initializes the exception with the mode and the tag being released."""
        super().__init__(f"no {mode} found to compare {tag_name!r} against")
        self.mode = mode
        self.tag_name = tag_name


class AggregationError(LorekeeperError):
    """Raised when the pull requests for the release notes cannot be gathered."""

    exit_code = 4


class NoPullRequestsFoundError(AggregationError):
    """Raised when no pull request qualifies for the release notes."""

    def __init__(self, mode: Any, cutoff: "Reference | None" = None, commit_sha: str | None = None) -> None:
        """Initializes the exception with the mode and the reference point used."""
        if cutoff is not None:
            message = f"no pull requests merged since latest {mode} ({cutoff.tag_name} @ {cutoff.published_at.isoformat()}) found"
        else:
            message = f"no pull request found for commit {commit_sha}"
        super().__init__(message)
        self.mode = mode
        self.cutoff = cutoff
        self.commit_sha = commit_sha


class PullRequestFetchError(AggregationError):
    """Raised when the details of a single pull request cannot be fetched."""

    def __init__(self, number: int, cause: Exception) -> None:
        """Initializes the exception with the pull request number and the underlying failure."""
        super().__init__(f"failed to fetch pull request #{number}: {cause}")
        self.number = number
        self.cause = cause


class ExternalSourceError(LorekeeperError):
    """Raised when git or GitHub fails to respond or returns malformed data."""

    exit_code = 5

    def __init__(self, operation: str, cause: Exception | str) -> None:
        """Initializes the exception with the failed operation and its cause."""
        super().__init__(f"{operation} failed: {cause}")
        self.operation = operation
        self.cause = cause
