"""Fixtures for unit tests."""

from typing import Callable, Generator

import pytest
import structlog

from label_automerge.automerge.models import MergeStrategy, Policy
from label_automerge.schemas.event import PullRequestEventModel
from tests.unit.utils import build_event_payload


@pytest.fixture(autouse=True)
def configure_structlog_for_caplog() -> Generator[None, None, None]:
    """Configure structlog for use with caplog."""
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    yield
    structlog.reset_defaults()


@pytest.fixture
def policy() -> Policy:
    """Default label policy used across tests."""
    return Policy(activate_label="auto-merge", disable_label="no-merge", strategy=MergeStrategy.SQUASH)


@pytest.fixture
def make_event() -> Callable[..., PullRequestEventModel]:
    """Factory for validated pull request events."""

    def _make_event(labels: list[str], action: str = "labeled", label: str | None = None) -> PullRequestEventModel:
        return PullRequestEventModel.model_validate(build_event_payload(labels, action, label))

    return _make_event
