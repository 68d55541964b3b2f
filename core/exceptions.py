"""
Domain exceptions raised by the workflow and project helpers.

Each carries the HTTP status and the machine-readable code the API answers
with; ``main.py`` registers one handler for :class:`AppError` so routes never
translate these by hand.

Usage:
    from core.exceptions import InvalidStateError, NotFoundError

    raise NotFoundError("Project", project_id)
    raise InvalidStateError('Project is not in the "Received" state')
"""


class AppError(Exception):
    """Base class for errors surfaced to API callers as 4xx responses."""

    status_code = 400
    code = "bad_request"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class NotFoundError(AppError):
    """A project or its workflow does not exist (or is soft-deleted)."""

    status_code = 404
    code = "not_found"

    def __init__(self, resource: str, resource_id: int | str | None = None, message: str | None = None) -> None:
        self.resource = resource
        self.resource_id = resource_id
        if message is None:
            message = f"{resource} not found"
        super().__init__(message)


class InvalidStateError(AppError):
    """Transition attempted from a status other than the one it requires."""

    status_code = 400
    code = "invalid_state"


class AuthorizationError(AppError):
    """Actor lacks the role or ownership the operation requires."""

    status_code = 403
    code = "forbidden"


class AlreadyApprovedError(AppError):
    status_code = 400
    code = "already_approved"


class ApprovalRequiredError(AppError):
    status_code = 400
    code = "approval_required"


class ConcurrentModificationError(AppError):
    """The row changed between the state check and the conditional update.

    Maps to HTTP 409. The caller may re-read the workflow and decide again.
    """

    status_code = 409
    code = "concurrent_modification"

    def __init__(self, project_id: int) -> None:
        self.project_id = project_id
        super().__init__(
            f"Workflow of project {project_id} was modified by another request, reload and try again"
        )
