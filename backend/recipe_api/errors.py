"""
Application error taxonomy.

Every error carries a caller-facing message, an HTTP status and an optional
cause. Causes are chained through ``__cause__`` as well so tracebacks show
the full history.
"""
from enum import Enum
from typing import Any, Optional


class AuthErrorKind(str, Enum):
    """Reason an authentication or authorization check failed."""
    INVALID_CREDENTIALS = "invalid_credentials"
    INVALID_SIGNATURE = "invalid_signature"
    EXPIRED = "expired"
    REVOKED = "revoked"
    MALFORMED = "malformed"
    MISSING_TOKEN = "missing_token"
    INVALID_SCHEME = "invalid_scheme"
    INSUFFICIENT_ROLE = "insufficient_role"


class RepositoryErrorReason(str, Enum):
    """Store-level failure categories."""
    NOT_FOUND = "not_found"
    DUPLICATE_KEY = "duplicate_key"
    INVALID = "invalid"
    STORE_FAILURE = "store_failure"


class AppError(Exception):
    """Base application error. Unrecognized failures surface as 500."""

    status_code: int = 500

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def details(self) -> dict[str, Any]:
        """Extra fields included when the error is serialized."""
        return {}


class ValidationError(AppError):
    """Missing or empty required fields, malformed body."""
    status_code = 400


class AuthError(AppError):
    """Bad credentials, unusable token, wrong scheme or missing role."""
    status_code = 403

    def __init__(
        self,
        message: str = "Unauthorized",
        kind: AuthErrorKind = AuthErrorKind.INVALID_CREDENTIALS,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(message, cause)
        self.kind = kind

    def details(self) -> dict[str, Any]:
        return {"kind": self.kind.value}


class NotFoundError(AppError):
    """Id or search yields nothing."""
    status_code = 404


class RepositoryError(AppError):
    """Store-layer failure."""

    def __init__(
        self,
        message: str,
        cause: Optional[BaseException] = None,
        reason: RepositoryErrorReason = RepositoryErrorReason.STORE_FAILURE,
    ):
        super().__init__(message, cause)
        self.reason = reason

    def details(self) -> dict[str, Any]:
        return {"reason": self.reason.value}


class WebhookError(AppError):
    """Outbound notification failure."""


def handle_error(error: BaseException, message: str) -> AppError:
    """
    Re-wrap an error with a caller-facing message, keeping it as the cause.

    Repository failures are translated into the error kind the boundary
    understands: a missing document becomes ``NotFoundError`` and a
    uniqueness or validation violation becomes ``ValidationError``.
    """
    if isinstance(error, RepositoryError):
        if error.reason is RepositoryErrorReason.NOT_FOUND:
            return NotFoundError(message, cause=error)
        if error.reason in (RepositoryErrorReason.DUPLICATE_KEY, RepositoryErrorReason.INVALID):
            return ValidationError(message, cause=error)
        return RepositoryError(message, cause=error, reason=error.reason)
    if isinstance(error, AuthError):
        return AuthError(message, kind=error.kind, cause=error)
    if isinstance(error, (ValidationError, NotFoundError, WebhookError)):
        return type(error)(message, cause=error)
    return AppError(message, cause=error)


def serialize_error(error: BaseException) -> dict[str, Any]:
    """
    Serialize an error and its cause chain for development responses.

    The chain is flattened into a list; an error already seen ends the walk,
    so cyclic chains terminate.
    """
    chain: list[dict[str, Any]] = []
    seen: set[int] = set()
    current: Optional[BaseException] = error

    while current is not None and id(current) not in seen:
        seen.add(id(current))
        entry: dict[str, Any] = {
            "type": type(current).__name__,
            "message": getattr(current, "message", None) or str(current),
        }
        if isinstance(current, AppError):
            entry["status"] = current.status_code
            entry.update(current.details())
        chain.append(entry)
        current = getattr(current, "cause", None) or current.__cause__ or current.__context__

    head, causes = chain[0], chain[1:]
    return {**head, "causes": causes}
