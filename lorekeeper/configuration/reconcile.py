"""Reconcile command line options, environment variables and repository state into a run configuration."""

import re

import structlog

from lorekeeper.configuration.env import Settings
from lorekeeper.configuration.exceptions import RequiredConfigurationElementError
from lorekeeper.configuration.models import ReleaseNotesConfig
from lorekeeper.git.repository import LocalGitRepository
from lorekeeper.github.adapter import GitHubKitAdapter
from lorekeeper.release_notes.exceptions import InvalidReleaseCandidatePatternError
from lorekeeper.release_notes.modes import Mode, get_mode_by_name
from lorekeeper.utils.constants import BRANCH_REF_PREFIX
from lorekeeper.utils.github import repository_from_remote_url

logger = structlog.get_logger(__name__)


def compile_release_candidate_pattern(pattern: str) -> re.Pattern[str]:
    """Compile the release candidate pattern, rejecting invalid regular expressions."""
    try:
        return re.compile(pattern)
    except re.error as e:
        raise InvalidReleaseCandidatePatternError(pattern, str(e)) from e


def strip_branch_ref(branch: str | None) -> str | None:
    """Turn 'refs/heads/main' into 'main', leaving plain branch names untouched."""
    if branch is not None and branch.startswith(BRANCH_REF_PREFIX):
        return branch[len(BRANCH_REF_PREFIX) :]
    return branch


def apply_environment(
    settings: Settings,
    tag_name: str | None,
    current_branch: str | None,
    repo: str | None,
    github_token: str | None,
) -> tuple[str | None, str | None, str | None, str | None]:
    """Fill in the options not given on the command line from GitHub Actions variables."""
    return (
        tag_name or settings.GITHUB_REF_NAME,
        current_branch or strip_branch_ref(settings.GITHUB_BASE_REF),
        repo or settings.GITHUB_REPOSITORY,
        github_token or settings.GITHUB_TOKEN,
    )


def validate_release_notes_options(tag_name: str | None, release_candidate_regex: str, mode_name: str) -> tuple[str, re.Pattern[str], Mode]:
    """Validate the options that need no external call.

    Raises:
        RequiredConfigurationElementError: If no tag is given.
        InvalidReleaseCandidatePatternError: If the pattern does not compile.
        UnknownModeError: If the mode name is not a known mode.
    """
    if not tag_name:
        raise RequiredConfigurationElementError(name="Tag", cli_name="--tag", env_name="GITHUB_REF_NAME")
    pattern = compile_release_candidate_pattern(release_candidate_regex)
    mode = get_mode_by_name(mode_name)
    return tag_name, pattern, mode


async def resolve_repository(repo: str | None, git: LocalGitRepository) -> str:
    """Use the given 'owner/repo', or derive it from the origin remote."""
    if repo:
        return repo
    repo = repository_from_remote_url(await git.remote_url())
    logger.info("Derived repository from origin remote", repo=repo)
    return repo


async def reconcile_release_notes_configuration(
    tag_name: str | None,
    release_candidate_regex: str,
    current_branch: str | None,
    default_branch: str | None,
    mode_name: str,
    git: LocalGitRepository,
    github: GitHubKitAdapter,
) -> ReleaseNotesConfig:
    """Validate the options and fill in missing branch names.

    Everything that needs no external call is validated first, so that a bad
    option fails before git or GitHub is queried.
    """
    tag_name, pattern, mode = validate_release_notes_options(tag_name, release_candidate_regex, mode_name)

    if not current_branch:
        current_branch = await git.current_branch()
        if current_branch is None:
            raise RequiredConfigurationElementError(name="Current branch", cli_name="--current-branch-name", env_name="GITHUB_BASE_REF")
        logger.info("Using checked out branch as current branch", current_branch=current_branch)
    if not default_branch:
        default_branch = await github.get_default_branch()
        logger.info("Using repository default branch", default_branch=default_branch)

    return ReleaseNotesConfig(
        tag_name=tag_name,
        release_candidate_pattern=pattern,
        current_branch=current_branch,
        default_branch=default_branch,
        mode=mode,
    )
