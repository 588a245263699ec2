"""
Chefini API - Custom Exception Classes.

Exception hierarchy for application error handling. Every subclass maps to
an HTTP status; `main.py` renders them as `{"error": message}`.
"""

from typing import Optional


class ChefiniException(Exception):
    """
    Base exception class for Chefini application.

    All custom exceptions should inherit from this class.

    Attributes:
        message: Human-readable error message returned to the client.
        status_code: HTTP status code for the error.
        detail: Additional error details for server-side logs.
    """

    def __init__(
        self,
        message: str = "An error occurred",
        status_code: int = 500,
        detail: Optional[str] = None
    ):
        self.message = message
        self.status_code = status_code
        self.detail = detail or message
        super().__init__(self.message)


class AuthenticationError(ChefiniException):
    """
    Exception raised for authentication failures.

    Used when:
    - Invalid credentials
    - Expired tokens
    - Missing session
    """

    def __init__(
        self,
        message: str = "Unauthorized",
        detail: Optional[str] = None
    ):
        super().__init__(message=message, status_code=401, detail=detail)


class NotFoundError(ChefiniException):
    """
    Exception raised when a resource is not found.

    Ownership failures are reported through this class as well, so a
    caller cannot tell someone else's recipe from a missing one.
    """

    def __init__(
        self,
        message: str = "Resource not found",
        detail: Optional[str] = None
    ):
        super().__init__(message=message, status_code=404, detail=detail)


class ValidationError(ChefiniException):
    """
    Exception raised for input validation failures.

    Used when:
    - Missing required fields
    - Invalid input format
    - Business rule violations (expired OTP, wrong current password)
    """

    def __init__(
        self,
        message: str = "Validation error",
        detail: Optional[str] = None
    ):
        super().__init__(message=message, status_code=400, detail=detail)


class ConflictError(ChefiniException):
    """Exception raised for duplicate entries (e.g. email already registered)."""

    def __init__(
        self,
        message: str = "Resource conflict",
        detail: Optional[str] = None
    ):
        super().__init__(message=message, status_code=409, detail=detail)


class UpstreamServiceError(ChefiniException):
    """
    Exception raised when an external dependency fails.

    Used for LLM provider errors, mail relay errors and database outages.
    """

    def __init__(
        self,
        message: str = "AI service error",
        detail: Optional[str] = None,
        status_code: int = 503
    ):
        super().__init__(message=message, status_code=status_code, detail=detail)


class AIResponseError(ChefiniException):
    """Exception raised when an AI response cannot be parsed or is incomplete."""

    def __init__(
        self,
        message: str = "Failed to parse AI response. Please try again.",
        detail: Optional[str] = None
    ):
        super().__init__(message=message, status_code=500, detail=detail)
