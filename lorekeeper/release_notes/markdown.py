"""Markdown rendering for release notes."""

from typing import TextIO

import structlog

from .models import Author, PullRequest

logger = structlog.get_logger(__name__)


class MarkdownWriter:
    """Writes one Markdown block per pull request to a text stream."""

    def __init__(self, stream: TextIO) -> None:
        """Initialize with the output stream."""
        self.stream = stream

    @staticmethod
    def render_author(author: Author) -> str:
        """Render an author as an avatar image labelled with the login."""
        return f"![@{author.login}]({author.sized_avatar_url})"

    def render_pull_request(self, pull_request: PullRequest) -> str:
        """Render the heading, authors and body of a pull request."""
        authors = " ".join(self.render_author(author) for author in pull_request.authors)
        return f"# {pull_request.title} (#{pull_request.number})\n\n## Authors\n\n{authors}\n\n{pull_request.body}\n\n"

    def write(self, pull_requests: list[PullRequest]) -> None:
        """Write every pull request in order, flushing after each block."""
        for pull_request in pull_requests:
            self.stream.write(self.render_pull_request(pull_request))
            self.stream.flush()
            logger.debug("Wrote release notes for pull request", number=pull_request.number)
