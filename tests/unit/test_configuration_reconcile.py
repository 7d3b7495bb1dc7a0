"""Unit tests for configuration reconciliation."""

from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest

from label_automerge.automerge.models import MergeStrategy
from label_automerge.configuration.exceptions import (
    GitHubAuthenticationConfigurationUndefinedError,
    InvalidMergeStrategyError,
    RequiredConfigurationElementError,
)
from label_automerge.configuration.models import AutoMergeConfig, GitHubAuthenticationType
from label_automerge.configuration.reconcile import (
    parse_merge_strategy,
    reconcile_auto_merge_configuration,
    validate_github_authentication_configuration,
)


def apply_settings(mock_settings: Any, **overrides: Any) -> None:
    """Populate a patched settings object with defaults and overrides."""
    values: dict[str, Any] = {
        "DEBUG": False,
        "GITHUB_API_URL": "https://api.github.com",
        "GITHUB_REPOSITORY": None,
        "GITHUB_EVENT_PATH": None,
        "GITHUB_TOKEN": None,
        "GITHUB_APP_ID": None,
        "GITHUB_APP_PRIVATE_KEY_PATH": None,
        "GITHUB_APP_INSTALLATION_ID": None,
        "ACTIVATE_LABEL": "auto-merge",
        "DISABLE_LABEL": "no-merge",
        "MERGE_STRATEGY": "SQUASH",
        "MERGE_BRANCH_FALLBACK": False,
    }
    values.update(overrides)
    for key, value in values.items():
        setattr(mock_settings, key, value)


@pytest.mark.asyncio
async def test_valid_token_authentication() -> None:
    """Test that token authentication is validated correctly."""
    auth_type = await validate_github_authentication_configuration(
        github_token="test-token",
        github_app_id=None,
        github_app_private_key_path=None,
        github_app_installation_id=None,
    )
    assert auth_type == GitHubAuthenticationType.PAT


@pytest.mark.asyncio
async def test_valid_app_authentication() -> None:
    """Test that GitHub App authentication is validated correctly."""
    auth_type = await validate_github_authentication_configuration(
        github_token=None,
        github_app_id=123,
        github_app_private_key_path=Path("/path/to/key.pem"),
        github_app_installation_id=456,
    )
    assert auth_type == GitHubAuthenticationType.APP


@pytest.mark.asyncio
async def test_both_auth_methods_error() -> None:
    """Test that error is raised when both token and App authentication are provided."""
    with pytest.raises(GitHubAuthenticationConfigurationUndefinedError) as exc_info:
        await validate_github_authentication_configuration(
            github_token="test-token",
            github_app_id=123,
            github_app_private_key_path=Path("/path/to/key.pem"),
            github_app_installation_id=456,
        )
    assert "Both token and GitHub App configurations are defined" in str(exc_info.value)


@pytest.mark.asyncio
async def test_no_auth_error() -> None:
    """Test that error is raised when no authentication is provided."""
    with pytest.raises(GitHubAuthenticationConfigurationUndefinedError) as exc_info:
        await validate_github_authentication_configuration(
            github_token=None,
            github_app_id=None,
            github_app_private_key_path=None,
            github_app_installation_id=None,
        )
    assert "GITHUB_TOKEN does not exist" in str(exc_info.value)


@pytest.mark.asyncio
async def test_incomplete_app_configuration_lists_missing_settings() -> None:
    """Test error messages include CLI option and environment variable names."""
    with pytest.raises(GitHubAuthenticationConfigurationUndefinedError) as exc_info:
        await validate_github_authentication_configuration(
            github_token=None,
            github_app_id=123,
            github_app_private_key_path=None,
            github_app_installation_id=None,
        )
    error_message = str(exc_info.value)
    assert "Incomplete GitHub App configuration" in error_message
    assert "command line option github_app_private_key_path" in error_message
    assert "environment variable GITHUB_APP_INSTALLATION_ID" in error_message
    assert "GitHub App ID" not in error_message


@pytest.mark.asyncio
@pytest.mark.parametrize("value,expected", [("MERGE", MergeStrategy.MERGE), ("SQUASH", MergeStrategy.SQUASH), ("REBASE", MergeStrategy.REBASE)])
async def test_parse_merge_strategy(value: str, expected: MergeStrategy) -> None:
    """Test GitHub merge methods are accepted."""
    assert await parse_merge_strategy(value) == expected


@pytest.mark.asyncio
@pytest.mark.parametrize("value", ["squash", "Squash", "fast-forward", ""])
async def test_parse_merge_strategy_is_exact(value: str) -> None:
    """Test anything but an exact merge method is rejected."""
    with pytest.raises(InvalidMergeStrategyError):
        await parse_merge_strategy(value)


@pytest.mark.asyncio
async def test_reconcile_with_cli_args() -> None:
    """Test reconciliation when values are provided via CLI arguments."""
    with patch("label_automerge.configuration.reconcile.settings") as mock_settings:
        apply_settings(mock_settings, GITHUB_TOKEN="env-token", GITHUB_REPOSITORY="env/repo")

        result = await reconcile_auto_merge_configuration(
            cli_debug=True,
            cli_github_api_url="https://github.example.com/api/v3",
            cli_github_token="cli-token",
            cli_repo="owner/repo",
            cli_event_path=Path("/tmp/event.json"),
            cli_activate_label="ship-it",
            cli_disable_label="hold",
            cli_strategy="REBASE",
            cli_merge_branch_fallback=True,
        )

    assert isinstance(result, AutoMergeConfig)
    assert result.debug is True
    assert result.github_api_url == "https://github.example.com/api/v3"
    assert result.github_token == "cli-token"
    assert result.github_authentication_type == GitHubAuthenticationType.PAT
    assert result.repo == "owner/repo"
    assert result.event_path == Path("/tmp/event.json")
    assert result.policy.activate_label == "ship-it"
    assert result.policy.disable_label == "hold"
    assert result.policy.strategy == MergeStrategy.REBASE
    assert result.merge_branch_fallback is True


@pytest.mark.asyncio
async def test_reconcile_with_env_vars() -> None:
    """Test reconciliation falls back to environment settings."""
    with patch("label_automerge.configuration.reconcile.settings") as mock_settings:
        apply_settings(
            mock_settings,
            DEBUG=True,
            GITHUB_TOKEN="env-token",
            GITHUB_REPOSITORY="env/repo",
            GITHUB_EVENT_PATH=Path("/github/workflow/event.json"),
            MERGE_STRATEGY="MERGE",
            MERGE_BRANCH_FALLBACK=True,
        )

        result = await reconcile_auto_merge_configuration()

    assert result.debug is True
    assert result.github_token == "env-token"
    assert result.repo == "env/repo"
    assert result.event_path == Path("/github/workflow/event.json")
    assert result.policy.activate_label == "auto-merge"
    assert result.policy.disable_label == "no-merge"
    assert result.policy.strategy == MergeStrategy.MERGE
    assert result.merge_branch_fallback is True


@pytest.mark.asyncio
async def test_reconcile_without_credentials_fails() -> None:
    """Test missing credentials abort reconciliation."""
    with patch("label_automerge.configuration.reconcile.settings") as mock_settings:
        apply_settings(mock_settings, GITHUB_EVENT_PATH=Path("/github/workflow/event.json"))
        with pytest.raises(GitHubAuthenticationConfigurationUndefinedError):
            await reconcile_auto_merge_configuration()


@pytest.mark.asyncio
async def test_reconcile_without_event_path_fails() -> None:
    """Test a missing event payload path is reported with its option names."""
    with patch("label_automerge.configuration.reconcile.settings") as mock_settings:
        apply_settings(mock_settings, GITHUB_TOKEN="env-token")
        with pytest.raises(RequiredConfigurationElementError) as exc_info:
            await reconcile_auto_merge_configuration()

    assert exc_info.value.env_name == "GITHUB_EVENT_PATH"


@pytest.mark.asyncio
async def test_reconcile_with_invalid_strategy_fails() -> None:
    """Test an unknown merge strategy is rejected during reconciliation."""
    with patch("label_automerge.configuration.reconcile.settings") as mock_settings:
        apply_settings(mock_settings, GITHUB_TOKEN="env-token", GITHUB_EVENT_PATH=Path("/tmp/event.json"))
        with pytest.raises(InvalidMergeStrategyError) as exc_info:
            await reconcile_auto_merge_configuration(cli_strategy="squash")

    assert exc_info.value.strategy == "squash"
