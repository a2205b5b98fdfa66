"""Error taxonomy surfaced at the command boundary.

Cancellation is not an error: prompts return ``None`` and commands return early.
Everything here is caught by ``DiredSession`` and reported once to the user.
"""

from __future__ import annotations


class DiredError(Exception):
    """Base class for user-reportable failures."""


class NotFoundError(DiredError):
    """A path was missing where it was assumed present."""

    def __init__(self, path: str, detail: str | None = None) -> None:
        self.path = path
        message = f"Not found: {path}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class InvalidTargetError(DiredError):
    """A rename would implicitly replace an existing directory."""

    def __init__(self, source: str, target: str) -> None:
        self.source = source
        self.target = target
        super().__init__(f"Cannot replace directory {target} with {source}")


class IOFailureError(DiredError):
    """A filesystem call failed for a reason other than a missing path."""

    def __init__(self, action: str, path: str, cause: OSError) -> None:
        self.action = action
        self.path = path
        self.cause = cause
        reason = cause.strerror or str(cause)
        super().__init__(f"Failed to {action} {path}: {reason}")


class BatchDeleteError(DiredError):
    """Some items of a batch delete failed; the rest were deleted."""

    def __init__(self, failures: list[tuple[str, str]], deleted: int) -> None:
        self.failures = tuple(failures)
        self.deleted = deleted
        first_reason = failures[0][1] if failures else ""
        if len(failures) == 1:
            message = first_reason
        else:
            message = f"Failed to delete {len(failures)} of {len(failures) + deleted} items ({first_reason})"
        super().__init__(message)


__all__ = [
    "DiredError",
    "NotFoundError",
    "InvalidTargetError",
    "IOFailureError",
    "BatchDeleteError",
]
