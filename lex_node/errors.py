"""
Error taxonomy for the Lex conversation node.
"""

from enum import Enum


class ErrorCode(str, Enum):
    """Outcome codes returned by the build and init operations."""

    SUCCESS = "success"
    INVALID_LEX_CONFIGURATION = "invalid_lex_configuration"
    INVALID_ARGUMENT = "invalid_argument"
    REMOTE_CALL_FAILED = "remote_call_failed"
    DECODE_FAILURE = "decode_failure"


class LexNodeError(Exception):
    """Base error carrying the matching ErrorCode."""

    error_code: ErrorCode = ErrorCode.INVALID_ARGUMENT


class InvalidConfigurationError(LexNodeError):
    """Raised when the bot identity is missing or malformed."""

    error_code = ErrorCode.INVALID_LEX_CONFIGURATION


class InvalidArgumentError(LexNodeError):
    """Raised when an operation needs an interactor that is not there."""

    error_code = ErrorCode.INVALID_ARGUMENT


class RemoteCallFailedError(LexNodeError):
    """Raised when the Lex PostContent call did not succeed."""

    error_code = ErrorCode.REMOTE_CALL_FAILED


class DecodeFailureError(LexNodeError):
    """Raised when the encoded slot payload cannot be decoded."""

    error_code = ErrorCode.DECODE_FAILURE


class LexServiceError(Exception):
    """Raised by a runtime client when the service returns an error."""

    def __init__(self, message: str, code: str = "Unknown"):
        super().__init__(message)
        self.code = code
