"""Defines the Command Line Interface (CLI) using Typer."""

import asyncio

import structlog
import typer
from dotenv import load_dotenv
from typer import Option
from typing_extensions import Annotated

from lorekeeper.configuration.env import Settings
from lorekeeper.configuration.reconcile import (
    apply_environment,
    reconcile_release_notes_configuration,
    resolve_repository,
    validate_release_notes_options,
)
from lorekeeper.git.repository import LocalGitRepository
from lorekeeper.github.adapter import GitHubKitAdapter
from lorekeeper.release_notes.exceptions import LorekeeperError
from lorekeeper.release_notes.generator import ReleaseNotesGenerator
from lorekeeper.release_notes.models import ReleaseNotesResult
from lorekeeper.release_notes.modes import Mode, list_modes
from lorekeeper.release_notes.source import RepositoryReferenceSource
from lorekeeper.utils.constants import DEFAULT_GITHUB_API_URL, DEFAULT_RELEASE_CANDIDATE_REGEX
from lorekeeper.utils.logging import configure_logging, verbosity_usage

load_dotenv()

logger = structlog.get_logger(__name__)

typer_app = typer.Typer(
    pretty_exceptions_show_locals=False,
    help=(
        "Keeper of your project's tale, inscribing every release into enduring lore. "
        "Writes Markdown release notes for a tag, built from the pull requests merged since the previous release."
    ),
)

MODES_USAGE = "Determines whether GitHub Releases or Git Tags are being used to identify releases. " + " ".join(
    f"{mode.value}: {mode.description}" for mode in list_modes()
)


async def run_release_notes(
    tag_name: str | None,
    release_candidate_regex: str,
    current_branch: str | None,
    default_branch: str | None,
    mode_name: str,
    repo: str | None,
    github_token: str | None,
    github_api_url: str,
) -> ReleaseNotesResult:
    """Reconcile the configuration against the repository and generate the release notes."""
    git = LocalGitRepository()
    repository = await resolve_repository(repo, git)
    github = GitHubKitAdapter.create(repo=repository, github_token=github_token, github_api_url=github_api_url)
    config = await reconcile_release_notes_configuration(
        tag_name=tag_name,
        release_candidate_regex=release_candidate_regex,
        current_branch=current_branch,
        default_branch=default_branch,
        mode_name=mode_name,
        git=git,
        github=github,
    )
    generator = ReleaseNotesGenerator(config=config, source=RepositoryReferenceSource(git, github))
    return await generator.generate()


@typer_app.command()
def lorekeeper_cli(
    tag: Annotated[
        str | None,
        Option("--tag", "-t", help="The release tag to use when checking for relevant branches and pull requests."),
    ] = None,
    release_candidate_regex: Annotated[
        str,
        Option("--release-candidate-regex", "-r", help="The regex pattern to use to identify tags that are release candidates."),
    ] = DEFAULT_RELEASE_CANDIDATE_REGEX,
    current_branch_name: Annotated[
        str | None,
        Option("--current-branch-name", "-c", help="The name of the current branch. Defaults to the checked out branch."),
    ] = None,
    default_branch_name: Annotated[
        str | None,
        Option(
            "--default-branch-name",
            "-d",
            help="The name of the default branch in the target repository (i.e - main, master, etc). Defaults to the repository's default branch.",
        ),
    ] = None,
    mode: Annotated[str, Option("--mode", "-m", help=MODES_USAGE)] = Mode.RELEASE.value,
    from_env: Annotated[
        bool,
        Option(
            "--from-env",
            help="Source the tag, current branch, repository and token from GITHUB_REF_NAME, GITHUB_BASE_REF, GITHUB_REPOSITORY and GITHUB_TOKEN.",
        ),
    ] = False,
    repo: Annotated[str | None, Option("--repo", help="Repository name (owner/repo). Defaults to the origin remote.")] = None,
    github_token: Annotated[str | None, Option("--github-token", help="GitHub token used for API requests.")] = None,
    github_api_url: Annotated[str, Option("--github-api-url", envvar="GITHUB_API_URL", help="GitHub API URL.")] = DEFAULT_GITHUB_API_URL,
    verbose: Annotated[int, Option("--verbose", "-v", count=True, help=verbosity_usage())] = 0,
) -> None:
    """Write release notes for a tag to stdout."""
    configure_logging(verbose)

    if from_env:
        tag, current_branch_name, repo, github_token = apply_environment(
            Settings(),
            tag_name=tag,
            current_branch=current_branch_name,
            repo=repo,
            github_token=github_token,
        )

    try:
        validate_release_notes_options(tag, release_candidate_regex, mode)
        result = asyncio.run(
            run_release_notes(
                tag_name=tag,
                release_candidate_regex=release_candidate_regex,
                current_branch=current_branch_name,
                default_branch=default_branch_name,
                mode_name=mode,
                repo=repo,
                github_token=github_token,
                github_api_url=github_api_url,
            )
        )
    except LorekeeperError as e:
        logger.error("Failed to make release notes", error_type=type(e).__name__, error=str(e))
        typer.echo(f"lorekeeper failed to make release notes: {e}", err=True)
        raise typer.Exit(e.exit_code) from e

    logger.info("Release notes complete", pull_requests=result.pull_request_numbers)


def main() -> None:
    """Entry point for the lorekeeper console script."""
    typer_app()


if __name__ == "__main__":
    main()
