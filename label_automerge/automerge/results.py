"""Contains results of an auto-merge run."""

from label_automerge.automerge.models import AutoMergeState, Decision


class AutoMergeRunResult:
    """Contains results of the auto-merge workflow for one pull request."""

    def __init__(self, pull_request_number: int, current_state: AutoMergeState, decision: Decision) -> None:
        """Initialize the result with the observed state and the decision taken."""
        self.pull_request_number = pull_request_number
        self.current_state = current_state
        self.decision = decision
        self.action_succeeded: bool | None = None
        self.fallback_attempted = False
        self.fallback_succeeded: bool | None = None
        self.errors: list[str] = []
