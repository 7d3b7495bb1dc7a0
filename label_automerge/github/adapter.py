"""GitHub auto-merge client adapter for the githubkit library."""

import json
from functools import wraps
from pathlib import Path
from typing import Any, Awaitable, Callable, Self, TypeVar

import structlog
from githubkit.exception import GraphQLFailed, RequestError, RequestFailed

from label_automerge.automerge.models import AutoMergeState, MergeStrategy
from label_automerge.configuration.models import GitHubAuthenticationType
from label_automerge.utils.github import split_repository_in_configuration

from .abc import AutoMergeClientBase
from .client import GitHubClient, get_github_client
from .exceptions import AutoMergeRequestError, PullRequestNotAutoMergeableError
from .queries import (
    DISABLE_AUTO_MERGE_MUTATION,
    ENABLE_AUTO_MERGE_MUTATION,
    GET_PULL_REQUEST_AUTO_MERGE_QUERY,
    MERGE_BRANCH_MUTATION,
    NOT_AUTO_MERGEABLE_ERROR_MESSAGES,
)

logger = structlog.get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])


def graphql_error_messages(exc: GraphQLFailed) -> list[str]:
    """Extract the error messages from a failed GraphQL response."""
    return [error.message for error in exc.response.errors or []]


def handle_github_errors(func: F) -> F:
    """Decorator translating githubkit failures into AutoMergeRequestError, logging the details."""

    @wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)
        except GraphQLFailed as exc:
            messages = graphql_error_messages(exc)
            logger.error("GitHub GraphQL request failed", function=func.__name__, errors=messages)
            message = "; ".join(messages)
            if any(marker in message for marker in NOT_AUTO_MERGEABLE_ERROR_MESSAGES):
                raise PullRequestNotAutoMergeableError(func.__name__, message) from exc
            raise AutoMergeRequestError(func.__name__, message) from exc
        except RequestFailed as exc:
            logger.error(
                "GitHub request failed",
                function=func.__name__,
                status_code=exc.response.status_code,
                url=getattr(exc.response, "url", None),
            )
            raise AutoMergeRequestError(func.__name__, f"HTTP {exc.response.status_code}") from exc
        except RequestError as exc:
            logger.error("GitHub request could not be completed", function=func.__name__, error_type=type(exc).__name__, error=str(exc))
            raise AutoMergeRequestError(func.__name__, str(exc) or type(exc).__name__) from exc

    return wrapper  # type: ignore


class GitHubKitAdapter(AutoMergeClientBase):
    """GitHub auto-merge client adapter for the githubkit library."""

    def __init__(self, client: GitHubClient, owner: str, repo_name: str) -> None:
        """Initialize the GitHub client adapter with an already-initialized client."""
        self.client = client
        self.owner = owner
        self.repo_name = repo_name

    @classmethod
    async def create(
        cls,
        repo: str,
        github_auth_type: GitHubAuthenticationType,
        github_token: str | None = None,
        github_app_id: int | None = None,
        github_app_private_key_path: Path | None = None,
        github_app_installation_id: int | None = None,
        github_api_url: str = "https://api.github.com",
    ) -> Self:
        """Create a new GitHub client adapter.

        Args:
            repo: Repository in 'owner/repo' format
            github_auth_type: Type of authentication (PAT or APP)
            github_token: Token (required for PAT auth)
            github_app_id: GitHub App ID (required for APP auth)
            github_app_private_key_path: Path to private key file (required for APP auth)
            github_app_installation_id: Installation ID (required for APP auth)
            github_api_url: GitHub API URL (defaults to https://api.github.com)

        Returns:
            Configured GitHubKitAdapter instance

        Raises:
            ValueError: If the repository is not in 'owner/repo' format
        """
        owner, repo_name = await split_repository_in_configuration(repo=repo)
        logger.info(
            "Creating client for GitHub instance and repository",
            github_api_url=github_api_url,
            owner=owner,
            repo_name=repo_name,
        )
        client = await get_github_client(
            github_auth_type=github_auth_type,
            github_token=github_token,
            github_app_id=github_app_id,
            github_app_private_key_path=github_app_private_key_path,
            github_app_installation_id=github_app_installation_id,
            github_api_url=github_api_url,
        )
        return cls(client, owner, repo_name)

    async def _graphql(self, query: str, variables: dict[str, Any]) -> dict[str, Any]:
        """Run a GraphQL document and log the response payload."""
        result: dict[str, Any] = await self.client.async_graphql(query, variables)
        logger.debug("GraphQL response payload", payload=json.dumps(result, indent=2))
        return result

    @handle_github_errors
    async def fetch_pull_request_state(self, pull_request_number: int) -> AutoMergeState:
        """Get the current auto-merge configuration of a pull request."""
        result = await self._graphql(
            GET_PULL_REQUEST_AUTO_MERGE_QUERY,
            {"owner": self.owner, "repo": self.repo_name, "number": pull_request_number},
        )
        auto_merge_request = ((result.get("repository") or {}).get("pullRequest") or {}).get("autoMergeRequest")
        if not auto_merge_request or not auto_merge_request.get("mergeMethod"):
            return AutoMergeState.disabled()
        return AutoMergeState.enabled(MergeStrategy(auto_merge_request["mergeMethod"]))

    @handle_github_errors
    async def enable_auto_merge(self, pull_request_id: str, strategy: MergeStrategy) -> dict[str, Any]:
        """Enable auto-merge on a pull request with the given merge method."""
        return await self._graphql(ENABLE_AUTO_MERGE_MUTATION, {"pullRequestId": pull_request_id, "strategy": strategy.value})

    @handle_github_errors
    async def disable_auto_merge(self, pull_request_id: str) -> dict[str, Any]:
        """Disable auto-merge on a pull request."""
        return await self._graphql(DISABLE_AUTO_MERGE_MUTATION, {"pullRequestId": pull_request_id})

    @handle_github_errors
    async def merge_branch(self, repository_id: str, base: str, head: str, commit_message: str | None = None) -> dict[str, Any]:
        """Merge the head branch directly into the base branch."""
        return await self._graphql(
            MERGE_BRANCH_MUTATION,
            {"repositoryId": repository_id, "base": base, "head": head, "commitMessage": commit_message},
        )
