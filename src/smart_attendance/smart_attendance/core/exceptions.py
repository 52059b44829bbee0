class DomainError(Exception):
    """Base exception for business rule violations.

    Each subclass carries the HTTP status the API layer answers with.
    """

    status_code = 500


class ValidationError(DomainError):
    """Raised when input data is missing or malformed."""

    status_code = 400


class InvalidStatusError(ValidationError):
    """Raised when an attendance status is not present/absent/late."""


class DuplicateEmailError(ValidationError):
    """Raised when an email is already registered for the role."""


class AuthenticationError(DomainError):
    """Raised when the caller cannot be identified."""

    status_code = 401


class InvalidCredentialsError(AuthenticationError):
    """Raised when login credentials are invalid (unknown email or wrong password)."""


class UnauthenticatedError(AuthenticationError):
    """Raised when no session credential was provided."""


class InvalidTokenError(AuthenticationError):
    """Raised when a session credential fails signature or claim checks."""


class TokenExpiredError(AuthenticationError):
    """Raised when a session credential is past its validity window."""


class ActorNotFoundError(AuthenticationError):
    """Raised when a credential names an actor that no longer exists."""


class AuthorizationError(DomainError):
    """Raised when an identified caller lacks permission for an action."""

    status_code = 403


class RoleMismatchError(AuthorizationError):
    """Raised when a valid credential is used on another role's route."""


class NotFoundError(DomainError):
    status_code = 404


class StudentNotFoundError(NotFoundError):
    pass
