"""Read-only access to the local Git repository through GitPython."""

import asyncio
import re
from pathlib import Path

import git
import git.exc as gitexc
import structlog
from pydantic import ValidationError

from lorekeeper.release_notes.exceptions import ExternalSourceError, TagNotFoundError
from lorekeeper.release_notes.models import Reference
from lorekeeper.utils.constants import DETACHED_HEAD, TAG_REF_FORMAT

logger = structlog.get_logger(__name__)


class LocalGitRepository:
    """Runs git commands against a working copy."""

    def __init__(self, path: Path | None = None) -> None:
        """Initialize with the working copy path (defaults to the current directory)."""
        self.path = path or Path.cwd()

    def _execute(self, command: str, *args: str) -> str:
        """Open the repository, run one git command and close it again."""
        with git.Repo(self.path, search_parent_directories=True) as repo:
            return getattr(repo.git, command)(*args)

    async def _run(self, command: str, *args: str) -> str:
        """Run a git command in a worker thread and return its stdout.

        `command` uses GitPython's naming, so `rev_list` runs `git rev-list`.
        A failing command raises `git.exc.GitCommandError` for the caller to
        map; a missing repository or git executable is an external failure.
        """
        logger.debug("Running git command", command=command, args=list(args), cwd=str(self.path))
        try:
            return await asyncio.to_thread(self._execute, command, *args)
        except (gitexc.GitCommandNotFound, gitexc.InvalidGitRepositoryError, gitexc.NoSuchPathError) as e:
            raise ExternalSourceError(f"git {command.replace('_', '-')}", e) from e

    async def resolve_commit_for_tag(self, tag_name: str) -> str:
        """Get the SHA of the newest commit reachable from a tag."""
        try:
            output = await self._run("rev_list", "-n", "1", tag_name, "--")
        except gitexc.GitCommandError as e:
            logger.debug("Tag could not be resolved", tag_name=tag_name, stderr=e.stderr)
            raise TagNotFoundError(tag_name) from e
        sha = output.strip()
        if not sha:
            raise TagNotFoundError(tag_name)
        logger.info("Resolved tag commit", tag_name=tag_name, sha=sha)
        return sha

    async def list_tags(self, exclude: re.Pattern[str] | None = None) -> list[Reference]:
        """List tags sorted by creator date, newest first."""
        try:
            output = await self._run("for_each_ref", "refs/tags", "--sort=-creatordate", f"--format={TAG_REF_FORMAT}")
        except gitexc.GitCommandError as e:
            raise ExternalSourceError("git for-each-ref", e) from e

        tags: list[Reference] = []
        for line in output.splitlines():
            if not line.strip():
                continue
            created_at, _, tag_name = line.partition("\t")
            if exclude is not None and exclude.search(tag_name):
                logger.debug("Excluding tag", tag_name=tag_name)
                continue
            try:
                tags.append(Reference(published_at=created_at, tag_name=tag_name))
            except ValidationError as e:
                raise ExternalSourceError("git for-each-ref", f"malformed tag line {line!r}: {e}") from e

        logger.info(f"Total tags found: {len(tags)}")
        return tags

    async def current_branch(self) -> str | None:
        """Get the name of the checked out branch, or None when HEAD is detached."""
        try:
            output = await self._run("rev_parse", "--abbrev-ref", "HEAD")
        except gitexc.GitCommandError as e:
            raise ExternalSourceError("git rev-parse", e) from e
        branch = output.strip()
        if branch == DETACHED_HEAD:
            logger.warning("HEAD is detached, no branch is checked out", path=str(self.path))
            return None
        return branch

    async def remote_url(self, remote: str = "origin") -> str:
        """Get the URL of a remote."""
        try:
            output = await self._run("remote", "get-url", remote)
        except gitexc.GitCommandError as e:
            raise ExternalSourceError("git remote get-url", e) from e
        return output.strip()
