"""Base ABC for GitHub auto-merge clients."""

from abc import ABC, abstractmethod
from typing import Any

from label_automerge.automerge.models import AutoMergeState, MergeStrategy


class AutoMergeClientBase(ABC):
    """Base ABC for GitHub auto-merge clients."""

    @abstractmethod
    async def fetch_pull_request_state(self, pull_request_number: int) -> AutoMergeState:
        """Get the current auto-merge configuration of a pull request."""
        pass

    @abstractmethod
    async def enable_auto_merge(self, pull_request_id: str, strategy: MergeStrategy) -> dict[str, Any]:
        """Enable auto-merge on a pull request with the given merge method."""
        pass

    @abstractmethod
    async def disable_auto_merge(self, pull_request_id: str) -> dict[str, Any]:
        """Disable auto-merge on a pull request."""
        pass

    @abstractmethod
    async def merge_branch(self, repository_id: str, base: str, head: str, commit_message: str | None = None) -> dict[str, Any]:
        """Merge the head branch directly into the base branch."""
        pass
