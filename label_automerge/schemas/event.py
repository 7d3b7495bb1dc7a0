"""Pydantic schema for the pull request webhook event payload."""

import json
from pathlib import Path

from pydantic import BaseModel, ValidationError


class PullRequestEventError(Exception):
    """Raised when the event payload is not a usable pull request event."""

    pass


class LabelModel(BaseModel):
    """Pydantic model for a GitHub label."""

    name: str


class BranchRefModel(BaseModel):
    """Pydantic model for the head or base branch of a pull request."""

    ref: str


class PullRequestModel(BaseModel):
    """Pydantic model for the pull request in an event payload."""

    number: int
    node_id: str
    labels: list[LabelModel] = []
    head: BranchRefModel
    base: BranchRefModel


class OwnerModel(BaseModel):
    """Pydantic model for a repository owner."""

    login: str


class RepositoryModel(BaseModel):
    """Pydantic model for the repository in an event payload."""

    node_id: str
    name: str
    owner: OwnerModel

    @property
    def full_name(self) -> str:
        """Repository in 'owner/repo' format."""
        return f"{self.owner.login}/{self.name}"


class PullRequestEventModel(BaseModel):
    """Pydantic model for a pull_request or pull_request_target event."""

    action: str
    label: LabelModel | None = None
    pull_request: PullRequestModel
    repository: RepositoryModel

    @property
    def label_names(self) -> frozenset[str]:
        """Names of the labels on the pull request when the event fired."""
        return frozenset(label.name for label in self.pull_request.labels)


def load_pull_request_event(event_path: Path) -> PullRequestEventModel:
    """Load and validate the pull request event payload written by the runner."""
    try:
        payload = json.loads(event_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise PullRequestEventError(f"Failed to read event payload from {event_path}: {exc}") from exc
    try:
        return PullRequestEventModel.model_validate(payload)
    except ValidationError as exc:
        raise PullRequestEventError(f"Event payload at {event_path} is not a pull request event: {exc}") from exc
