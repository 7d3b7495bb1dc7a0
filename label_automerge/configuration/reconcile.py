"""Reconcile GitHub authentication and label policy configuration."""

from pathlib import Path

import structlog

from label_automerge.automerge.models import MergeStrategy, Policy
from label_automerge.configuration.env import settings
from label_automerge.configuration.exceptions import (
    GitHubAuthenticationConfigurationUndefinedError,
    InvalidMergeStrategyError,
    RequiredConfigurationElementError,
)
from label_automerge.configuration.models import AutoMergeConfig, GitHubAuthenticationType

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


async def validate_github_authentication_configuration(
    github_token: str | None,
    github_app_id: int | None,
    github_app_private_key_path: Path | None,
    github_app_installation_id: int | None,
) -> GitHubAuthenticationType:
    """Validates the GitHub authentication configuration.

    Args:
        github_token (str | None): The GitHub token.
        github_app_id (int | None): The GitHub App ID.
        github_app_private_key_path (Path | None): The path to the GitHub App private key.
        github_app_installation_id (int | None): The GitHub App installation ID.

    Raises:
        GitHubAuthenticationConfigurationUndefinedError: If no usable authentication configuration is defined.

    Returns:
        GitHubAuthenticationType: The type of GitHub authentication used.
    """
    if github_token and (github_app_id or github_app_private_key_path or github_app_installation_id):
        raise GitHubAuthenticationConfigurationUndefinedError("Both token and GitHub App configurations are defined. Please use one or the other.")

    if github_token:
        return GitHubAuthenticationType.PAT

    if github_app_id and github_app_private_key_path and github_app_installation_id:
        return GitHubAuthenticationType.APP
    elif github_app_id or github_app_private_key_path or github_app_installation_id:
        missing_settings: list[dict[str, str]] = []
        if not github_app_id:
            missing_settings.append({"name": "GitHub App ID", "cli_name": "github_app_id", "env_name": "GITHUB_APP_ID"})
        if not github_app_private_key_path:
            missing_settings.append(
                {
                    "name": "GitHub App private key path",
                    "cli_name": "github_app_private_key_path",
                    "env_name": "GITHUB_APP_PRIVATE_KEY_PATH",
                }
            )
        if not github_app_installation_id:
            missing_settings.append(
                {
                    "name": "GitHub App installation ID",
                    "cli_name": "github_app_installation_id",
                    "env_name": "GITHUB_APP_INSTALLATION_ID",
                }
            )
        msg = "Incomplete GitHub App configuration - missing settings include " + ", ".join(
            f"{setting['name']} (command line option {setting['cli_name']}, environment variable {setting['env_name']})"
            for setting in missing_settings
        )
        raise GitHubAuthenticationConfigurationUndefinedError(msg)
    else:
        raise GitHubAuthenticationConfigurationUndefinedError(
            "GITHUB_TOKEN does not exist. Please provide either a token or a GitHub App configuration."
        )


async def parse_merge_strategy(strategy: str) -> MergeStrategy:
    """Parse a configured strategy into a merge method.

    Matching is exact; "squash" is not accepted in place of "SQUASH".
    """
    try:
        return MergeStrategy(strategy)
    except ValueError as exc:
        raise InvalidMergeStrategyError(strategy) from exc


async def reconcile_auto_merge_configuration(
    cli_debug: bool = False,
    cli_github_api_url: str | None = None,
    cli_github_token: str | None = None,
    cli_github_app_id: int | None = None,
    cli_github_app_private_key_path: Path | None = None,
    cli_github_app_installation_id: int | None = None,
    cli_repo: str | None = None,
    cli_event_path: Path | None = None,
    cli_activate_label: str | None = None,
    cli_disable_label: str | None = None,
    cli_strategy: str | None = None,
    cli_merge_branch_fallback: bool = False,
) -> AutoMergeConfig:
    """Reconcile CLI arguments with environment settings for the run command.

    CLI values take precedence; anything left unset falls back to the
    environment (including a local .env file).
    """
    github_token = cli_github_token or settings.GITHUB_TOKEN
    github_app_id = cli_github_app_id or settings.GITHUB_APP_ID
    github_app_private_key_path = cli_github_app_private_key_path or settings.GITHUB_APP_PRIVATE_KEY_PATH
    github_app_installation_id = cli_github_app_installation_id or settings.GITHUB_APP_INSTALLATION_ID

    github_authentication_type = await validate_github_authentication_configuration(
        github_token=github_token,
        github_app_id=github_app_id,
        github_app_private_key_path=github_app_private_key_path,
        github_app_installation_id=github_app_installation_id,
    )

    event_path = cli_event_path or settings.GITHUB_EVENT_PATH
    if event_path is None:
        raise RequiredConfigurationElementError(name="GitHub event payload path", cli_name="event_path", env_name="GITHUB_EVENT_PATH")

    policy = Policy(
        activate_label=cli_activate_label or settings.ACTIVATE_LABEL,
        disable_label=cli_disable_label or settings.DISABLE_LABEL,
        strategy=await parse_merge_strategy(cli_strategy or settings.MERGE_STRATEGY),
    )
    logger.debug(
        "Reconciled label policy",
        activate_label=policy.activate_label,
        disable_label=policy.disable_label,
        strategy=policy.strategy.value,
    )

    return AutoMergeConfig(
        debug=cli_debug or settings.DEBUG,
        github_api_url=cli_github_api_url or settings.GITHUB_API_URL,
        github_authentication_type=github_authentication_type,
        github_token=github_token,
        github_app_id=github_app_id,
        github_app_private_key_path=github_app_private_key_path,
        github_app_installation_id=github_app_installation_id,
        repo=cli_repo or settings.GITHUB_REPOSITORY,
        event_path=event_path,
        policy=policy,
        merge_branch_fallback=cli_merge_branch_fallback or settings.MERGE_BRANCH_FALLBACK,
    )
