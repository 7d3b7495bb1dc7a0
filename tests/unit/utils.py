"""Helpers shared by unit tests."""

from typing import Any


def build_event_payload(labels: list[str], action: str = "labeled", label: str | None = None) -> dict[str, Any]:
    """Build a minimal pull_request event payload."""
    payload: dict[str, Any] = {
        "action": action,
        "pull_request": {
            "number": 42,
            "node_id": "PR_kwDOA",
            "labels": [{"name": name, "color": "ededed"} for name in labels],
            "head": {"ref": "feature/thing", "sha": "abc123"},
            "base": {"ref": "main", "sha": "def456"},
        },
        "repository": {"node_id": "R_kgDOB", "name": "repo", "full_name": "owner/repo", "owner": {"login": "owner"}},
    }
    if label is not None:
        payload["label"] = {"name": label}
    return payload
