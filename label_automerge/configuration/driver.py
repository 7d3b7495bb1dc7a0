"""Synchronous driver for configuration reconciliation for the CLI entry point."""

import asyncio
from pathlib import Path

from label_automerge.configuration import reconcile
from label_automerge.configuration.models import AutoMergeConfig


def get_auto_merge_config(
    debug: bool = False,
    github_api_url: str | None = None,
    github_token: str | None = None,
    github_app_id: int | None = None,
    github_app_private_key_path: Path | None = None,
    github_app_installation_id: int | None = None,
    repo: str | None = None,
    event_path: Path | None = None,
    activate_label: str | None = None,
    disable_label: str | None = None,
    strategy: str | None = None,
    merge_branch_fallback: bool = False,
) -> AutoMergeConfig:
    """Synchronously get the reconciled run configuration."""
    return asyncio.run(
        reconcile.reconcile_auto_merge_configuration(
            cli_debug=debug,
            cli_github_api_url=github_api_url,
            cli_github_token=github_token,
            cli_github_app_id=github_app_id,
            cli_github_app_private_key_path=github_app_private_key_path,
            cli_github_app_installation_id=github_app_installation_id,
            cli_repo=repo,
            cli_event_path=event_path,
            cli_activate_label=activate_label,
            cli_disable_label=disable_label,
            cli_strategy=strategy,
            cli_merge_branch_fallback=merge_branch_fallback,
        )
    )
