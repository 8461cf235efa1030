# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Custom exceptions for Hookflow.

All exceptions inherit from HookflowError for consistent error handling.
Request-scoped errors (authentication, malformed event, not found) map
straight to an HTTP status. Workflow-scoped errors (configuration,
downstream, execution) are caught per workflow and recorded as failed
executions instead of failing the webhook delivery.
"""

from typing import Optional


class HookflowError(Exception):
    """Base exception for all Hookflow errors."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: Optional[dict] = None
    ):
        """
        Initialize Hookflow error.

        Args:
            message: Human-readable error message
            status_code: HTTP status code
            details: Additional error details
        """
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict:
        """Convert error to dictionary for API response."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "status_code": self.status_code,
            "details": self.details
        }


class NotFoundError(HookflowError):
    """Resource not found."""

    def __init__(self, resource: str, identifier, details: Optional[dict] = None):
        """
        Initialize not found error.

        Args:
            resource: Type of resource (e.g., "Connection", "Workflow")
            identifier: Resource identifier
            details: Additional error details
        """
        message = f"{resource} not found: {identifier}"
        super().__init__(message, status_code=404, details=details)
        self.resource = resource
        self.identifier = identifier


class ValidationError(HookflowError):
    """Validation failed."""

    def __init__(self, message: str, field: Optional[str] = None, details: Optional[dict] = None):
        super().__init__(message, status_code=400, details=details)
        self.field = field


class AuthenticationError(HookflowError):
    """Webhook signature or token check failed."""

    def __init__(self, message: str = "Invalid webhook signature", details: Optional[dict] = None):
        super().__init__(message, status_code=401, details=details)


class MalformedEventError(HookflowError):
    """Webhook body could not be parsed or carries no recognizable event."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message, status_code=400, details=details)


class ConfigurationError(HookflowError):
    """
    Workflow or connection is misconfigured.

    During webhook processing this aborts a single workflow only.
    """

    def __init__(self, message: str, workflow_id: Optional[int] = None, details: Optional[dict] = None):
        super().__init__(message, status_code=500, details=details)
        self.workflow_id = workflow_id


class DownstreamError(HookflowError):
    """Call to a target service failed."""

    def __init__(self, message: str, service: Optional[str] = None, details: Optional[dict] = None):
        super().__init__(message, status_code=502, details=details)
        self.service = service


class ActionTimeoutError(DownstreamError):
    """Downstream call exceeded the action timeout."""

    def __init__(self, service: str, action_type: str, timeout: float):
        super().__init__(
            f"Action '{action_type}' on {service} exceeded timeout ({timeout}s)",
            service=service
        )
        self.action_type = action_type
        self.timeout = timeout


class ExecutionError(HookflowError):
    """
    A workflow action failed.

    Carries the index of the offending action and the underlying cause.
    The message is the cause's message so execution records capture it
    verbatim.
    """

    def __init__(self, action_index: int, cause: Exception, action_type: Optional[str] = None):
        message = str(cause) or cause.__class__.__name__
        super().__init__(
            message,
            status_code=500,
            details={"action_index": action_index, "action_type": action_type}
        )
        self.action_index = action_index
        self.action_type = action_type
        self.cause = cause


# Error Message Utilities

def sanitize_error_for_user(error: Exception, include_type: bool = True) -> str:
    """
    Sanitize error messages for user display.
    Removes stack traces and over-long payload echoes.

    Args:
        error: The exception to sanitize
        include_type: Whether to include exception type

    Returns:
        User-friendly error message without stack trace
    """
    error_msg = str(error).strip()

    # Limit message length
    if len(error_msg) > 500:
        error_msg = error_msg[:500] + "..."

    if include_type:
        return f"{error.__class__.__name__}: {error_msg}"

    return error_msg
