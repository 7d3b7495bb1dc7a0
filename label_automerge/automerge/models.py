"""Models describing auto-merge state, label policy, and decisions."""

from dataclasses import dataclass
from enum import Enum


class MergeStrategy(str, Enum):
    """GitHub pull request merge methods."""

    MERGE = "MERGE"
    SQUASH = "SQUASH"
    REBASE = "REBASE"


class DecisionAction(Enum):
    """Enum for auto-merge decisions."""

    ENABLE = "enable"
    DISABLE = "disable"
    NOOP = "noop"


@dataclass(frozen=True)
class AutoMergeState:
    """Auto-merge configuration of a pull request as reported by GitHub.

    A ``strategy`` of ``None`` means auto-merge is disabled. ``known`` is False
    when the state could not be fetched; such a state compares as disabled.
    """

    strategy: MergeStrategy | None = None
    known: bool = True

    @classmethod
    def disabled(cls) -> "AutoMergeState":
        """Auto-merge is off."""
        return cls()

    @classmethod
    def enabled(cls, strategy: MergeStrategy) -> "AutoMergeState":
        """Auto-merge is on with the given merge method."""
        return cls(strategy=strategy)

    @classmethod
    def unknown(cls) -> "AutoMergeState":
        """The state could not be retrieved."""
        return cls(known=False)

    @property
    def is_enabled(self) -> bool:
        """Whether auto-merge is currently enabled."""
        return self.strategy is not None


@dataclass(frozen=True)
class Policy:
    """Operator-configured label names and desired merge method."""

    activate_label: str
    disable_label: str
    strategy: MergeStrategy


@dataclass(frozen=True)
class Decision:
    """The action to take for a pull request."""

    action: DecisionAction
    strategy: MergeStrategy | None = None

    @classmethod
    def noop(cls) -> "Decision":
        """Leave auto-merge as it is."""
        return cls(DecisionAction.NOOP)

    @classmethod
    def enable(cls, strategy: MergeStrategy) -> "Decision":
        """Enable auto-merge with the given merge method."""
        return cls(DecisionAction.ENABLE, strategy)

    @classmethod
    def disable(cls) -> "Decision":
        """Disable auto-merge."""
        return cls(DecisionAction.DISABLE)
