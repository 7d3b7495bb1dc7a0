"""Drives a single auto-merge reconciliation for a pull request event."""

import structlog
from structlog.contextvars import bound_contextvars

from label_automerge.automerge.decision import decide_auto_merge_action, was_activate_label_removed
from label_automerge.automerge.models import AutoMergeState, DecisionAction, Policy
from label_automerge.automerge.results import AutoMergeRunResult
from label_automerge.github.abc import AutoMergeClientBase
from label_automerge.github.exceptions import AutoMergeRequestError, PullRequestNotAutoMergeableError
from label_automerge.schemas.event import PullRequestEventModel

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


async def get_current_auto_merge_state(client: AutoMergeClientBase, pull_request_number: int) -> AutoMergeState:
    """Fetch the auto-merge state, falling back to an unknown state when the request fails."""
    try:
        state = await client.fetch_pull_request_state(pull_request_number)
    except AutoMergeRequestError as exc:
        logger.warning("Could not fetch auto-merge state, treating it as disabled", error=str(exc))
        return AutoMergeState.unknown()
    logger.info("Fetched current auto-merge state", enabled=state.is_enabled, strategy=state.strategy.value if state.strategy else None)
    return state


async def merge_branch_directly(client: AutoMergeClientBase, event: PullRequestEventModel, result: AutoMergeRunResult) -> None:
    """Merge the pull request head into its base branch, logging any failure."""
    base = event.pull_request.base.ref
    head = event.pull_request.head.ref
    logger.info("Pull request has nothing pending, merging branch directly", base=base, head=head)
    result.fallback_attempted = True
    try:
        await client.merge_branch(
            repository_id=event.repository.node_id,
            base=base,
            head=head,
            commit_message=f"Merge pull request #{event.pull_request.number} from {head}",
        )
    except AutoMergeRequestError as exc:
        logger.error("Direct branch merge failed", base=base, head=head, error=str(exc))
        result.fallback_succeeded = False
        result.errors.append(str(exc))
        return
    logger.info("Merged branch directly", base=base, head=head)
    result.fallback_succeeded = True


async def run_auto_merge_workflow(
    client: AutoMergeClientBase,
    event: PullRequestEventModel,
    policy: Policy,
    merge_branch_fallback: bool = False,
) -> AutoMergeRunResult:
    """Reconcile the pull request's auto-merge setting with its labels.

    Remote failures are logged and recorded on the result; nothing here raises
    for a failed GitHub request.
    """
    pull_request = event.pull_request
    with bound_contextvars(pull_request_number=pull_request.number):
        current_state = await get_current_auto_merge_state(client, pull_request.number)
        activate_label_removed = was_activate_label_removed(event, policy)
        logger.info(
            "Evaluating pull request labels",
            labels=sorted(event.label_names),
            event_action=event.action,
            event_label=event.label.name if event.label else None,
            activate_label_removed=activate_label_removed,
        )
        decision = decide_auto_merge_action(event.label_names, current_state, policy, activate_label_removed)
        result = AutoMergeRunResult(pull_request.number, current_state, decision)

        if decision.action == DecisionAction.NOOP:
            logger.info("Auto-merge is already in the correct state")
            return result

        try:
            if decision.action == DecisionAction.DISABLE:
                logger.info("Disabling auto-merge for this pull request")
                await client.disable_auto_merge(pull_request.node_id)
            else:
                strategy = decision.strategy or policy.strategy
                logger.info("Enabling auto-merge for this pull request", strategy=strategy.value)
                await client.enable_auto_merge(pull_request.node_id, strategy)
        except PullRequestNotAutoMergeableError as exc:
            result.action_succeeded = False
            result.errors.append(str(exc))
            if merge_branch_fallback and decision.action == DecisionAction.ENABLE:
                await merge_branch_directly(client, event, result)
            else:
                logger.error("Auto-merge request failed", decision=decision.action.value, error=str(exc))
            return result
        except AutoMergeRequestError as exc:
            logger.error("Auto-merge request failed", decision=decision.action.value, error=str(exc))
            result.action_succeeded = False
            result.errors.append(str(exc))
            return result

        logger.info("Auto-merge request succeeded", decision=decision.action.value)
        result.action_succeeded = True
        return result
