# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Core utilities and shared modules for Hookflow.

This package contains:
- config: Configuration management
- dependencies: Dependency injection
- errors: Custom exceptions
- logging: Structured logging
"""

from hookflow.core.config import get_config, Config
from hookflow.core.errors import HookflowError, NotFoundError, ValidationError
from hookflow.core.logging import get_logger

__all__ = [
    "get_config",
    "Config",
    "HookflowError",
    "NotFoundError",
    "ValidationError",
    "get_logger",
]
