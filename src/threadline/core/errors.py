"""Domain exceptions raised by the content graph and reaction ledger.

Every exception here is an expected, caller-recoverable condition. Each class
carries a stable machine-readable ``code`` and the HTTP status the API edge
renders it with; the services never log-and-swallow them.
"""

from __future__ import annotations


class ContentError(RuntimeError):
    """Base exception for content-graph and reaction failures."""

    code = "content_error"
    status_code = 400
    default_message = "Request could not be completed"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFound(ContentError):
    """Referenced post, user, or draft is absent or not eligible for the operation.

    Drafts belonging to someone else surface as this error so their
    existence is never revealed.
    """

    code = "not_found"
    status_code = 404
    default_message = "Post not found"


class Forbidden(ContentError):
    """Actor lacks rights over a resource they are allowed to see."""

    code = "forbidden"
    status_code = 403
    default_message = "You are not authorized to perform this action"


class InvalidTarget(ContentError):
    """Post exists but is the wrong kind or status for the relationship."""

    code = "invalid_target"
    status_code = 422
    default_message = "Post cannot be the target of this interaction"


class InvalidState(ContentError):
    """Requested transition is illegal given the current state."""

    code = "invalid_state"
    status_code = 409
    default_message = "Post is not in a state that allows this transition"


class ValidationFailure(ContentError):
    """Submitted content fails shape or length constraints."""

    code = "validation_failure"
    status_code = 422
    default_message = "Invalid post content"


class Conflict(ContentError):
    """Concurrent modification could not be resolved; the caller should retry."""

    code = "conflict"
    status_code = 409
    default_message = "Concurrent update detected, please retry"


__all__ = [
    "ContentError",
    "NotFound",
    "Forbidden",
    "InvalidTarget",
    "InvalidState",
    "ValidationFailure",
    "Conflict",
]
