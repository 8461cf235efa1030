# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Hookflow - webhook-driven automation between GitHub, Taskade, Notion and Slack.
"""

__version__ = "0.1.0"
