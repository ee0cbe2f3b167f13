"""Domain error taxonomy.

Every error carries a stable ``code`` so clients can tell apart failures that
share an HTTP status, e.g. "try again" (``invalid_code``) versus "request a
new code" (``code_expired``, ``attempts_exhausted``).
"""


class DomainError(Exception):
    code = "internal"

    def __init__(self, message: str = None):
        super().__init__(message or self.__class__.__doc__ or self.code)
        self.message = message or self.__class__.__doc__ or self.code


class ValidationError(DomainError):
    """Invalid input"""
    code = "validation_error"


class NotFoundError(DomainError):
    """Resource not found"""
    code = "not_found"


class ConflictError(DomainError):
    """Email already exists"""
    code = "duplicate_email"


class AlreadyVerifiedError(ConflictError):
    """Email already verified"""
    code = "already_verified"


class UnauthorizedError(DomainError):
    """Not authenticated"""
    code = "unauthorized"


class InvalidCredentialsError(UnauthorizedError):
    """Invalid email or password"""
    code = "invalid_credentials"


class EmailNotVerifiedError(UnauthorizedError):
    """Please verify your email before logging in"""
    code = "email_not_verified"


class OneTimeCodeError(DomainError):
    """One-time code rejected"""
    code = "code_rejected"


class InvalidCodeError(OneTimeCodeError):
    """Invalid code"""
    code = "invalid_code"


class CodeExpiredError(OneTimeCodeError):
    """Code has expired, request a new one"""
    code = "code_expired"


class CodeAlreadyUsedError(OneTimeCodeError):
    """Code already used"""
    code = "code_already_used"


class AttemptsExhaustedError(OneTimeCodeError):
    """Maximum attempts reached, request a new code"""
    code = "attempts_exhausted"


class UpstreamUnavailableError(DomainError):
    """Upstream service unavailable"""
    code = "upstream_unavailable"


class StoreUnavailableError(DomainError):
    """Session store is structurally unavailable"""
    code = "store_unavailable"
