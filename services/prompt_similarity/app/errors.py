from enum import Enum


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    PROVIDER = "provider"
    TIMEOUT = "timeout"
    DEGENERATE_VECTOR = "degenerate_vector"
    INVALID_INPUT = "invalid_input"


class ScoringError(Exception):
    """
    Base for every failure the scoring pipeline reports to callers.

    Each subclass pins one ErrorKind and the HTTP status it maps to.
    """

    kind: ErrorKind = ErrorKind.PROVIDER
    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ScoringError):
    kind = ErrorKind.VALIDATION
    status_code = 400


class NotFoundError(ScoringError):
    kind = ErrorKind.NOT_FOUND
    status_code = 404


class ProviderError(ScoringError):
    kind = ErrorKind.PROVIDER
    status_code = 500


class ProviderTimeoutError(ProviderError):
    kind = ErrorKind.TIMEOUT


class InvalidInputError(ScoringError, ValueError):
    kind = ErrorKind.INVALID_INPUT
    status_code = 500


class DegenerateVectorError(ScoringError, ValueError):
    kind = ErrorKind.DEGENERATE_VECTOR
    status_code = 500
