# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Outbound service integrations.
"""

from hookflow.integrations.base import ServiceTarget
from hookflow.integrations.credentials import CredentialCache
from hookflow.integrations.dispatch import ActionDispatcher, create_dispatcher

__all__ = ["ActionDispatcher", "CredentialCache", "ServiceTarget", "create_dispatcher"]
