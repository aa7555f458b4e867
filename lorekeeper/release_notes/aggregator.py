"""Gather the pull requests covered by a resolved reference point."""

import structlog

from lorekeeper.github.abc import ReferenceSourceBase

from .exceptions import ExternalSourceError, NoPullRequestsFoundError, PullRequestFetchError
from .models import PullRequest, Resolution

logger = structlog.get_logger(__name__)


class PullRequestAggregator:
    """Fetches the pull requests of a resolution, keeping the source's order."""

    def __init__(self, source: ReferenceSourceBase) -> None:
        """Initialize with the reference source."""
        self.source = source

    async def list_pull_request_numbers(self, resolution: Resolution) -> list[int]:
        """List the numbers of the qualifying pull requests, newest first."""
        cutoff = resolution.cutoff
        if cutoff is None:
            if resolution.pull_request_number is None:
                raise NoPullRequestsFoundError(resolution.mode, commit_sha=resolution.commit_sha)
            return [resolution.pull_request_number]

        numbers = await self.source.list_merged_pull_requests(after=cutoff.published_at)
        if not numbers:
            raise NoPullRequestsFoundError(resolution.mode, cutoff=cutoff)
        logger.debug(f"Found {len(numbers)} pull requests merged since {cutoff.tag_name}", pull_requests=numbers)
        return numbers

    async def aggregate(self, resolution: Resolution) -> list[PullRequest]:
        """Fetch every qualifying pull request, one at a time.

        Any pull request that cannot be fetched aborts the whole aggregation.
        """
        pull_requests: list[PullRequest] = []
        for number in await self.list_pull_request_numbers(resolution):
            logger.debug(f"Processing PR #{number}")
            try:
                pull_request = await self.source.get_pull_request(number)
            except ExternalSourceError as e:
                logger.error("Failed to fetch PR data", pr_number=number, error=str(e))
                raise PullRequestFetchError(number, e) from e
            pull_requests.append(pull_request)

        logger.info("Aggregated pull requests", count=len(pull_requests))
        return pull_requests
