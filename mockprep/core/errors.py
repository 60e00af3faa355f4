"""
Application error taxonomy.

Services raise these; the exception handlers registered in main.py turn them
into `{"success": false, "error": ...}` bodies with the matching status code.
"""
from fastapi import status


class AppError(Exception):
    """Base class for errors that map onto an HTTP response."""
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"
    code: str = "internal_error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"
    default_message = "Not found"


class ResultsNotReadyError(AppError):
    """Raised when results are requested before a submission completed."""
    status_code = status.HTTP_404_NOT_FOUND
    code = "results_not_ready"
    default_message = "Interview results not found. Please complete the interview first."


class UnauthorizedError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "unauthorized"
    default_message = "Unauthorized"


class ForbiddenError(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "forbidden"
    default_message = "Forbidden"


class RequestValidationFailed(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "validation_error"
    default_message = "Invalid request"


class AdapterError(AppError):
    """The generative-language call failed or returned an unusable payload."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "adapter_error"
    default_message = "AI service error"
