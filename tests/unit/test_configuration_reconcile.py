"""Unit tests for the configuration.reconcile module."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from lorekeeper.configuration.env import Settings
from lorekeeper.configuration.exceptions import RequiredConfigurationElementError
from lorekeeper.configuration.reconcile import (
    apply_environment,
    compile_release_candidate_pattern,
    reconcile_release_notes_configuration,
    resolve_repository,
    strip_branch_ref,
    validate_release_notes_options,
)
from lorekeeper.release_notes.exceptions import ConfigurationError, InvalidReleaseCandidatePatternError, UnknownModeError
from lorekeeper.release_notes.modes import Mode


def make_git(current_branch: str | None = "feature/x", remote_url: str = "git@github.com:octocat/Hello-World.git") -> MagicMock:
    """Build a mocked local repository."""
    git = MagicMock()
    git.current_branch = AsyncMock(return_value=current_branch)
    git.remote_url = AsyncMock(return_value=remote_url)
    return git


def make_github(default_branch: str = "main") -> MagicMock:
    """Build a mocked GitHub adapter."""
    github = MagicMock()
    github.get_default_branch = AsyncMock(return_value=default_branch)
    return github


def test_compile_release_candidate_pattern_invalid() -> None:
    """Test that an invalid regex is a configuration error."""
    with pytest.raises(InvalidReleaseCandidatePatternError) as exc_info:
        compile_release_candidate_pattern("-rc(")
    assert isinstance(exc_info.value, ConfigurationError)
    assert exc_info.value.pattern == "-rc("


def test_validate_release_notes_options() -> None:
    """Test that valid options are returned compiled and looked up."""
    tag_name, pattern, mode = validate_release_notes_options("v1.0.0", r"-rc\d+", "tag")
    assert tag_name == "v1.0.0"
    assert pattern.search("v1.0.0-rc1")
    assert mode is Mode.TAG


@pytest.mark.parametrize(
    "tag_name,regex,mode_name,expected_error",
    [
        pytest.param(None, "-rc", "release", RequiredConfigurationElementError, id="missing tag"),
        pytest.param("", "-rc", "release", RequiredConfigurationElementError, id="empty tag"),
        pytest.param("v1.0.0", "[", "release", InvalidReleaseCandidatePatternError, id="invalid regex"),
        pytest.param("v1.0.0", "-rc", "releases", UnknownModeError, id="unknown mode"),
    ],
)
def test_validate_release_notes_options_invalid(tag_name: str | None, regex: str, mode_name: str, expected_error: type[Exception]) -> None:
    """Test that each invalid option raises its configuration error."""
    with pytest.raises(expected_error):
        validate_release_notes_options(tag_name, regex, mode_name)


@pytest.mark.parametrize(
    "branch,expected",
    [
        pytest.param("refs/heads/main", "main", id="qualified"),
        pytest.param("main", "main", id="plain"),
        pytest.param("refs/heads/feature/x", "feature/x", id="nested"),
        pytest.param(None, None, id="missing"),
    ],
)
def test_strip_branch_ref(branch: str | None, expected: str | None) -> None:
    """Test that only the refs/heads/ prefix is removed."""
    assert strip_branch_ref(branch) == expected


def test_apply_environment_fills_missing_values() -> None:
    """Test that GitHub Actions variables fill in only what was not given on the command line."""
    settings = Settings(
        GITHUB_REF_NAME="v2.0.0",
        GITHUB_BASE_REF="refs/heads/main",
        GITHUB_REPOSITORY="octocat/Hello-World",
        GITHUB_TOKEN="token-from-env",
    )
    assert apply_environment(settings, tag_name=None, current_branch=None, repo=None, github_token=None) == (
        "v2.0.0",
        "main",
        "octocat/Hello-World",
        "token-from-env",
    )
    assert apply_environment(settings, tag_name="v3.0.0", current_branch="dev", repo="a/b", github_token="flag-token") == (
        "v3.0.0",
        "dev",
        "a/b",
        "flag-token",
    )


@pytest.mark.asyncio
async def test_resolve_repository_from_remote() -> None:
    """Test that the repository is derived from origin when not given."""
    git = make_git()
    assert await resolve_repository(None, git) == "octocat/Hello-World"
    assert await resolve_repository("given/repo", git) == "given/repo"
    git.remote_url.assert_awaited_once()


@pytest.mark.asyncio
async def test_reconcile_uses_given_branches() -> None:
    """Test that explicit branch names are used without querying git or GitHub."""
    git = make_git()
    github = make_github()
    config = await reconcile_release_notes_configuration(
        tag_name="v1.0.0",
        release_candidate_regex="-rc",
        current_branch="main",
        default_branch="main",
        mode_name="release",
        git=git,
        github=github,
    )
    assert config.tag_name == "v1.0.0"
    assert config.mode is Mode.RELEASE
    git.current_branch.assert_not_awaited()
    github.get_default_branch.assert_not_awaited()


@pytest.mark.asyncio
async def test_reconcile_fills_in_branches() -> None:
    """Test that missing branch names come from the checkout and the repository."""
    config = await reconcile_release_notes_configuration(
        tag_name="v1.0.0-rc1",
        release_candidate_regex="-rc",
        current_branch=None,
        default_branch=None,
        mode_name="tag",
        git=make_git(current_branch="feature/x"),
        github=make_github(default_branch="trunk"),
    )
    assert config.current_branch == "feature/x"
    assert config.default_branch == "trunk"


@pytest.mark.asyncio
async def test_reconcile_validates_before_external_calls() -> None:
    """Test that configuration errors surface before git or GitHub is queried."""
    git = make_git()
    github = make_github()
    with pytest.raises(InvalidReleaseCandidatePatternError):
        await reconcile_release_notes_configuration(
            tag_name="v1.0.0",
            release_candidate_regex="(",
            current_branch=None,
            default_branch=None,
            mode_name="tag",
            git=git,
            github=github,
        )
    git.current_branch.assert_not_awaited()
    github.get_default_branch.assert_not_awaited()


@pytest.mark.asyncio
async def test_reconcile_detached_head_without_current_branch() -> None:
    """Test that a detached checkout with no branch given is a missing configuration element."""
    github = make_github()
    with pytest.raises(RequiredConfigurationElementError) as exc_info:
        await reconcile_release_notes_configuration(
            tag_name="v1.0.0",
            release_candidate_regex="-rc",
            current_branch=None,
            default_branch=None,
            mode_name="tag",
            git=make_git(current_branch=None),
            github=github,
        )
    assert exc_info.value.cli_name == "--current-branch-name"
    assert exc_info.value.env_name == "GITHUB_BASE_REF"
    github.get_default_branch.assert_not_awaited()
