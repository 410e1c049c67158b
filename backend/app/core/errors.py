"""Error kinds surfaced by the HTTP handlers.

Every error carries an HTTP status, a short ``error`` label and a human
``message``; the exception handlers in ``app.main`` turn them into the
``{"success": false, "error": ..., "message": ...}`` envelope.
"""
import logging
from collections.abc import Iterator
from contextlib import contextmanager

logger = logging.getLogger(__name__)


class AppError(Exception):
    status_code: int = 500
    label: str = "Internal server error"

    def __init__(self, message: str | None = None, *, error: str | None = None):
        self.error = error or self.label
        self.message = message or self.error
        super().__init__(self.message)

    def to_envelope(self) -> dict:
        return {"success": False, "error": self.error, "message": self.message}


class MethodNotAllowed(AppError):
    status_code = 405
    label = "Method not allowed"


class Unauthorized(AppError):
    status_code = 401
    label = "Unauthorized"


class Forbidden(AppError):
    status_code = 403
    label = "Admin access required"


class RequestValidationFailed(AppError):
    status_code = 400
    label = "Invalid request"


class NotFound(AppError):
    status_code = 404
    label = "Not found"


class InternalError(AppError):
    status_code = 500


class GenerationError(AppError):
    """The language model did not produce a usable artifact."""

    status_code = 500
    label = "Generation failed"


class UpstreamEmptyResponse(GenerationError):
    label = "No response from AI model"


class MalformedUpstreamJSON(GenerationError):
    label = "Invalid JSON response from AI"

    def __init__(self, raw_text: str, detail: str | None = None):
        super().__init__(detail or self.label)
        self.raw_text = raw_text


class SchemaViolation(GenerationError):
    label = "Invalid structure received from AI"

    def __init__(self, missing_keys: list[str], message: str | None = None):
        super().__init__(message or f"{self.label}: missing {', '.join(missing_keys)}")
        self.missing_keys = missing_keys


class InvitationNotFound(NotFound):
    label = "Invalid or expired invitation"


class InvitationExpired(RequestValidationFailed):
    label = "Invitation has expired"


@contextmanager
def failure_envelope(label: str) -> Iterator[None]:
    """Re-raise client errors untouched; report everything else as a 500 labelled ``label``."""
    try:
        yield
    except AppError as exc:
        if exc.status_code < 500:
            raise
        logger.error("%s: %s", label, exc.message)
        raise InternalError(exc.message, error=label) from exc
    except Exception as exc:
        logger.exception("%s", label)
        raise InternalError(str(exc) or "Unknown error occurred", error=label) from exc
