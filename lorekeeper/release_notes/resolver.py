"""Decides which pull requests belong in the release notes of a tag."""

import re

import structlog

from lorekeeper.github.abc import ReferenceSourceBase

from .exceptions import DefaultBranchReleaseCandidateError, InvalidModeError, NoReferenceFoundError
from .models import Reference, Resolution
from .modes import Mode

logger = structlog.get_logger(__name__)


class ReleaseReferenceResolver:
    """Resolves the reference point the release notes of a tag are diffed against.

    A tag is a release candidate when the pattern matches its name, and it is
    on the default branch when the current branch name equals the default
    branch name exactly.

    - Release candidate off the default branch: the single pull request that
      contains the tag's commit.
    - Release candidate on the default branch: everything merged since the
      latest release or tag, candidate or not.
    - Stable tag on the default branch: everything merged since the latest
      non-candidate release or tag.
    - Stable tag off the default branch: refused.
    """

    def __init__(self, source: ReferenceSourceBase, release_candidate_pattern: re.Pattern[str]) -> None:
        """Initialize with the reference source and the compiled release candidate pattern."""
        self.source = source
        self.release_candidate_pattern = release_candidate_pattern

    def is_release_candidate(self, name: str) -> bool:
        """Check whether a tag or release name denotes a release candidate."""
        return self.release_candidate_pattern.search(name) is not None

    async def resolve(self, tag_name: str, current_branch: str, default_branch: str, mode: Mode) -> Resolution:
        """Resolve where to look for the pull requests of `tag_name`."""
        is_release_candidate = self.is_release_candidate(tag_name)
        is_on_default_branch = current_branch == default_branch
        logger.info(
            "Classified tag",
            tag_name=tag_name,
            release_candidate=is_release_candidate,
            on_default_branch=is_on_default_branch,
            current_branch=current_branch,
            default_branch=default_branch,
            mode=str(mode),
        )

        if not isinstance(mode, Mode):
            raise InvalidModeError(mode)

        if not is_on_default_branch:
            if not is_release_candidate:
                raise DefaultBranchReleaseCandidateError(tag_name, default_branch)
            commit_sha = await self.source.resolve_commit_for_tag(tag_name)
            number = await self.source.find_pull_request_by_commit(commit_sha)
            logger.info("Resolved pull request from tag commit", tag_name=tag_name, sha=commit_sha, pull_request=number)
            return Resolution(mode=mode, commit_sha=commit_sha, pull_request_number=number)

        cutoff = await self._resolve_cutoff(tag_name, mode, include_release_candidates=is_release_candidate)
        logger.info("Resolved cutoff reference", tag_name=cutoff.tag_name, published_at=cutoff.published_at.isoformat())
        return Resolution(mode=mode, cutoff=cutoff)

    async def _resolve_cutoff(self, tag_name: str, mode: Mode, include_release_candidates: bool) -> Reference:
        """Get the latest earlier release or tag, optionally skipping release candidates."""
        if mode is Mode.RELEASE:
            references = await self.source.list_releases()
            if not include_release_candidates:
                references = [ref for ref in references if not self.is_release_candidate(ref.tag_name)]
        elif mode is Mode.TAG:
            exclude = None if include_release_candidates else self.release_candidate_pattern
            references = await self.source.list_tags(exclude=exclude)
        else:
            raise InvalidModeError(mode)

        # The tag being released may already exist as a release or tag.
        candidates = [ref for ref in references if ref.tag_name != tag_name]
        if not candidates:
            raise NoReferenceFoundError(mode, tag_name)
        return max(candidates, key=lambda ref: ref.published_at)
