"""Utility modules for shared functionality."""

from .github import split_repository_in_configuration
from .logging import configure_logging

__all__ = [
    "split_repository_in_configuration",
    "configure_logging",
]
