"""Contains exceptions raised by the GitHub auto-merge client."""


class AutoMergeRequestError(Exception):
    """Raised when a GitHub auto-merge request fails."""

    def __init__(self, operation: str, message: str) -> None:
        """Initializes the exception with the failed operation and the error message."""
        super().__init__(f"{operation} failed: {message}")
        self.operation = operation
        self.message = message


class PullRequestNotAutoMergeableError(AutoMergeRequestError):
    """Raised when GitHub refuses to enable auto-merge because nothing is pending.

    GitHub only accepts an auto-merge request while required status checks or
    reviews are outstanding. A pull request in this state can be merged directly.
    """

    pass
