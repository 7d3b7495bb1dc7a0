"""Defines the Command Line Interface (CLI) using Typer."""

import asyncio
from pathlib import Path

import structlog
import typer
from dotenv import load_dotenv
from typer import Option
from typing_extensions import Annotated

from label_automerge.automerge.driver import run_auto_merge_workflow
from label_automerge.configuration.driver import get_auto_merge_config
from label_automerge.configuration.exceptions import (
    GitHubAuthenticationConfigurationUndefinedError,
    InvalidMergeStrategyError,
    RequiredConfigurationElementError,
)
from label_automerge.configuration.models import AutoMergeConfig
from label_automerge.github.adapter import GitHubKitAdapter
from label_automerge.schemas.event import PullRequestEventError, PullRequestEventModel, load_pull_request_event
from label_automerge.utils.logging import configure_logging

load_dotenv()

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

typer_app = typer.Typer(pretty_exceptions_show_locals=False)


@typer_app.callback()
def main_callback() -> None:
    """Toggle pull request auto-merge from labels."""


async def run_for_event(config: AutoMergeConfig, event: PullRequestEventModel) -> None:
    """Build the GitHub client and reconcile auto-merge for the event's pull request."""
    repo = config.repo or event.repository.full_name
    adapter = await GitHubKitAdapter.create(
        repo=repo,
        github_auth_type=config.github_authentication_type,
        github_token=config.github_token,
        github_app_id=config.github_app_id,
        github_app_private_key_path=config.github_app_private_key_path,
        github_app_installation_id=config.github_app_installation_id,
        github_api_url=config.github_api_url,
    )
    result = await run_auto_merge_workflow(
        adapter,
        event,
        config.policy,
        merge_branch_fallback=config.merge_branch_fallback,
    )
    for error in result.errors:
        logger.warning("Auto-merge run finished with a logged error", error=error)


@typer_app.command(name="run")
def run_cli(
    activate_label: Annotated[
        str | None, Option(envvar=["ACTIVATE_LABEL", "INPUT_ACTIVATE-LABEL"], help="Label that requests auto-merge.")
    ] = None,
    disable_label: Annotated[
        str | None, Option(envvar=["DISABLE_LABEL", "INPUT_DISABLED-LABEL"], help="Label that forces auto-merge off.")
    ] = None,
    strategy: Annotated[
        str | None, Option(envvar=["MERGE_STRATEGY", "INPUT_STRATEGY"], help="Merge method to use when enabling: MERGE, SQUASH, or REBASE.")
    ] = None,
    merge_branch_fallback: Annotated[
        bool,
        Option(
            envvar=["MERGE_BRANCH_FALLBACK", "INPUT_MERGE-BRANCH-FALLBACK"],
            help="Merge the branch directly when GitHub refuses auto-merge because nothing is pending.",
        ),
    ] = False,
    event_path: Annotated[Path | None, Option(envvar="GITHUB_EVENT_PATH", help="Path to the pull request event payload.")] = None,
    repo: Annotated[str | None, Option(envvar="GITHUB_REPOSITORY", help="Repository name (owner/repo).")] = None,
    github_api_url: Annotated[str | None, Option(envvar="GITHUB_API_URL", help="GitHub API URL.")] = None,
    github_token: Annotated[str | None, Option(envvar="GITHUB_TOKEN", help="GitHub token.")] = None,
    github_app_id: Annotated[int | None, Option(envvar="GITHUB_APP_ID", help="GitHub App ID.")] = None,
    github_app_private_key_path: Annotated[Path | None, Option(envvar="GITHUB_APP_PRIVATE_KEY_PATH", help="Path to GitHub App private key.")] = None,
    github_app_installation_id: Annotated[int | None, Option(envvar="GITHUB_APP_INSTALLATION_ID", help="GitHub App Installation ID.")] = None,
    debug: Annotated[bool, Option(envvar="DEBUG", help="Enable debug mode.")] = False,
) -> None:
    """Enable or disable auto-merge on the pull request that triggered this run."""
    configure_logging(debug)
    try:
        config = get_auto_merge_config(
            debug=debug,
            github_api_url=github_api_url,
            github_token=github_token,
            github_app_id=github_app_id,
            github_app_private_key_path=github_app_private_key_path,
            github_app_installation_id=github_app_installation_id,
            repo=repo,
            event_path=event_path,
            activate_label=activate_label,
            disable_label=disable_label,
            strategy=strategy,
            merge_branch_fallback=merge_branch_fallback,
        )
    except (GitHubAuthenticationConfigurationUndefinedError, RequiredConfigurationElementError, InvalidMergeStrategyError) as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(1) from exc

    configure_logging(config.debug)

    try:
        event = load_pull_request_event(config.event_path)
    except PullRequestEventError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(1) from exc

    asyncio.run(run_for_event(config, event))


if __name__ == "__main__":
    typer_app()
