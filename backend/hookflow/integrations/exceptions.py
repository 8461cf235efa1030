# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Integration Exceptions

Structured errors raised by the outbound service clients.
"""

from typing import Optional

from hookflow.core.errors import ConfigurationError, DownstreamError


class IntegrationError(DownstreamError):
    """Base exception for target-service API failures."""

    def __init__(self, message: str, service: str, api_status: Optional[int] = None):
        super().__init__(message, service=service, details={"api_status": api_status})
        self.api_status = api_status


class IntegrationConfigError(ConfigurationError):
    """Connection or action lacks a required target (repo, project, database, channel)."""
    pass


class GitHubAPIError(IntegrationError):
    def __init__(self, message: str, api_status: Optional[int] = None):
        super().__init__(message, service="github", api_status=api_status)


class TaskadeAPIError(IntegrationError):
    def __init__(self, message: str, api_status: Optional[int] = None):
        super().__init__(message, service="taskade", api_status=api_status)


class NotionAPIError(IntegrationError):
    def __init__(self, message: str, api_status: Optional[int] = None):
        super().__init__(message, service="notion", api_status=api_status)


class SlackAPIError(IntegrationError):
    def __init__(self, message: str, api_status: Optional[int] = None):
        super().__init__(message, service="slack", api_status=api_status)
