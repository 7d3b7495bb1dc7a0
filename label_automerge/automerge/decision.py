"""Contains the decision logic for toggling auto-merge from pull request labels."""

from collections.abc import Iterable

import structlog

from label_automerge.automerge.models import AutoMergeState, Decision, Policy
from label_automerge.schemas.event import PullRequestEventModel

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


def was_activate_label_removed(event: PullRequestEventModel, policy: Policy) -> bool:
    """Whether this event is the removal of the activate label."""
    return event.action == "unlabeled" and event.label is not None and event.label.name == policy.activate_label


def decide_auto_merge_action(
    labels: Iterable[str],
    current_state: AutoMergeState,
    policy: Policy,
    activate_label_removed: bool = False,
) -> Decision:
    """Decide whether to enable, disable, or leave auto-merge alone.

    The disable label and removal of the activate label take precedence over
    the activate label, so a pull request carrying both labels ends up with
    auto-merge disabled. Strategy comparison is exact.
    """
    label_set = frozenset(labels)

    if policy.disable_label in label_set or activate_label_removed:
        if current_state.is_enabled:
            logger.info(
                "Auto-merge should be disabled",
                disable_label_present=policy.disable_label in label_set,
                activate_label_removed=activate_label_removed,
            )
            return Decision.disable()
        logger.info("Auto-merge is already disabled")
        return Decision.noop()

    if policy.activate_label in label_set:
        if current_state.strategy == policy.strategy:
            logger.info("Auto-merge is already enabled with the desired strategy", strategy=policy.strategy.value)
            return Decision.noop()
        logger.info(
            "Auto-merge should be enabled",
            strategy=policy.strategy.value,
            current_strategy=current_state.strategy.value if current_state.strategy else None,
        )
        return Decision.enable(policy.strategy)

    logger.info("Neither auto-merge label is present")
    return Decision.noop()
