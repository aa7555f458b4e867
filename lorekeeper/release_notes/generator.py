"""Main release notes generation orchestration."""

import sys
from typing import TextIO

import structlog

from lorekeeper.configuration.models import ReleaseNotesConfig
from lorekeeper.github.abc import ReferenceSourceBase

from .aggregator import PullRequestAggregator
from .markdown import MarkdownWriter
from .models import ReleaseNotesResult, ReleaseNotesStatus
from .resolver import ReleaseReferenceResolver

logger = structlog.get_logger(__name__)


class ReleaseNotesGenerator:
    """Orchestrates release notes generation: resolve, aggregate, then render.

    Every pull request is fetched before anything is written, so a failure
    leaves the output stream untouched.
    """

    def __init__(self, config: ReleaseNotesConfig, source: ReferenceSourceBase, stream: TextIO | None = None) -> None:
        """Initialize with the run configuration, the reference source and the output stream.

        Args:
            config: Reconciled configuration for this run
            source: Where tags, releases and pull requests come from
            stream: Where the Markdown is written (defaults to stdout)
        """
        self.config = config
        self.source = source
        self.stream = stream if stream is not None else sys.stdout

    async def generate(self) -> ReleaseNotesResult:
        """Generate the release notes for the configured tag."""
        resolver = ReleaseReferenceResolver(self.source, self.config.release_candidate_pattern)
        aggregator = PullRequestAggregator(self.source)
        writer = MarkdownWriter(self.stream)

        resolution = await resolver.resolve(
            tag_name=self.config.tag_name,
            current_branch=self.config.current_branch,
            default_branch=self.config.default_branch,
            mode=self.config.mode,
        )
        pull_requests = await aggregator.aggregate(resolution)
        writer.write(pull_requests)

        logger.info("Generated release notes", tag_name=self.config.tag_name, pull_request_count=len(pull_requests))
        return ReleaseNotesResult(
            status=ReleaseNotesStatus.SUCCESS,
            mode=self.config.mode,
            cutoff=resolution.cutoff,
            pull_request_numbers=[pr.number for pr in pull_requests],
        )
