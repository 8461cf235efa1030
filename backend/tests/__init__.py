# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Test Suite for Hookflow

Structure:
- unit/: Storage services, integrations, configuration
- webhooks/: Webhook engine components
- api/: HTTP endpoints end to end
"""
