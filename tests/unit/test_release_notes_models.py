"""Unit tests for the release_notes.models module."""

import pytest
from pydantic import ValidationError

from lorekeeper.release_notes.models import Author, Commit, PullRequest, Reference, Resolution
from lorekeeper.release_notes.modes import Mode
from tests.unit.fakes import ts


@pytest.mark.parametrize(
    "avatar_url,expected",
    [
        pytest.param("https://example.com/a.png?v=4", "https://example.com/a.png?s=64&v=4", id="version parameter"),
        pytest.param(
            "https://avatars.githubusercontent.com/u/1?u=abc&v=12",
            "https://avatars.githubusercontent.com/u/1?u=abc&s=64&v=12",
            id="version parameter after another",
        ),
        pytest.param("https://example.com/a.png", "https://example.com/a.png", id="no version parameter"),
        pytest.param("", "", id="empty"),
    ],
)
def test_sized_avatar_url(avatar_url: str, expected: str) -> None:
    """Test that the avatar version parameter is prefixed with the size parameter."""
    assert Author(login="alice", avatar_url=avatar_url).sized_avatar_url == expected


def test_pull_request_authors_flatten_in_commit_order() -> None:
    """Test that authors are flattened commit by commit without de-duplication."""
    alice = Author(login="alice")
    bob = Author(login="bob")
    pull_request = PullRequest(number=1, title="t", commits=[Commit(authors=[alice]), Commit(authors=[]), Commit(authors=[bob, alice])])
    assert [author.login for author in pull_request.authors] == ["alice", "bob", "alice"]


def test_reference_parses_iso_timestamps() -> None:
    """Test that references accept the ISO 8601 dates git and GitHub produce."""
    reference = Reference(published_at="2024-01-01T10:00:00+00:00", tag_name="v1.0.0")  # type: ignore[arg-type]
    assert reference.published_at == ts(10)


@pytest.mark.parametrize(
    "fields",
    [
        pytest.param({"published_at": "not a date", "tag_name": "v1.0.0"}, id="bad date"),
        pytest.param({"published_at": "2024-01-01T10:00:00Z", "tag_name": ""}, id="empty name"),
    ],
)
def test_reference_rejects_invalid_fields(fields: dict[str, str]) -> None:
    """Test that malformed references are rejected."""
    with pytest.raises(ValidationError):
        Reference(**fields)  # type: ignore[arg-type]


def test_pull_request_number_must_be_positive() -> None:
    """Test that pull request numbers are positive."""
    with pytest.raises(ValidationError):
        PullRequest(number=0, title="t")


def test_resolution_needs_exactly_one_target() -> None:
    """Test that a resolution is either a cutoff or a commit lookup, never both or neither."""
    cutoff = Reference(published_at=ts(1), tag_name="v1.0.0")
    with pytest.raises(ValidationError):
        Resolution(mode=Mode.TAG)
    with pytest.raises(ValidationError):
        Resolution(mode=Mode.TAG, cutoff=cutoff, commit_sha="abc")
    assert not Resolution(mode=Mode.TAG, cutoff=cutoff).is_single_pull_request
    assert Resolution(mode=Mode.TAG, commit_sha="abc").is_single_pull_request
