# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Slack integration - post messages with chat.postMessage.
"""

from typing import Any, Dict

from hookflow.integrations.base import BaseServiceClient, ServiceTarget
from hookflow.integrations.exceptions import IntegrationConfigError, SlackAPIError
from hookflow.models.workflow import SendMessageParams


class SlackClient(BaseServiceClient):
    service = "slack"
    display_name = "Slack"
    error_class = SlackAPIError

    async def send_message(self, target: ServiceTarget, params: SendMessageParams) -> Dict[str, Any]:
        channel = params.channel or target.config.get("channel")
        if not channel:
            raise IntegrationConfigError("Slack channel is required")

        data = await self._request(
            "POST",
            "/chat.postMessage",
            target,
            json={"channel": channel, "text": params.text},
        )
        # Slack reports failures in the body with HTTP 200
        if not data.get("ok", False):
            raise SlackAPIError(f"Slack API error: {data.get('error', 'unknown_error')}")
        return {"channel": data.get("channel", channel), "ts": data.get("ts")}
