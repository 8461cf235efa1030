# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Delivery deduplication.

Senders retry deliveries they consider failed. Each delivery is keyed by
the sender's delivery id (X-GitHub-Delivery) or, without one, a hash of
the connection id and the raw body. Keys are remembered in process memory
for a TTL, so the guard does not survive restarts. A delivery whose
processing fails is released again so the sender's retry is handled.
"""

import hashlib
from datetime import datetime, timedelta, timezone
from typing import Dict, Mapping, Optional

from hookflow.core.logging import get_service_logger
from hookflow.webhooks.verification import get_header

logger = get_service_logger("dedup")

DELIVERY_HEADERS = ("X-GitHub-Delivery",)


def delivery_key(connection_id: int, raw_body: bytes, headers: Mapping[str, str]) -> str:
    for name in DELIVERY_HEADERS:
        delivery_id = get_header(headers, name)
        if delivery_id:
            return f"{connection_id}:{delivery_id}"

    digest = hashlib.sha256(str(connection_id).encode("utf-8") + b":" + raw_body).hexdigest()
    return f"{connection_id}:sha256:{digest}"


class DeliveryDeduplicator:
    """Remembers processed delivery keys for `ttl_seconds`"""

    def __init__(self, ttl_seconds: int = 86400, enabled: bool = True):
        self.ttl = timedelta(seconds=ttl_seconds)
        self.enabled = enabled
        self.processed: Dict[str, datetime] = {}

    def _cleanup(self, now: datetime) -> None:
        cutoff = now - self.ttl
        expired = [key for key, seen in self.processed.items() if seen < cutoff]
        for key in expired:
            del self.processed[key]
        if expired:
            logger.debug(
                f"Cleaned up {len(expired)} expired delivery keys",
                extra={"expired_count": len(expired), "cache_size": len(self.processed)}
            )

    def is_duplicate(
        self,
        connection_id: int,
        raw_body: bytes,
        headers: Mapping[str, str],
        now: Optional[datetime] = None
    ) -> bool:
        """
        Check and record a delivery.

        Returns:
            True if the same delivery was seen within the TTL
        """
        if not self.enabled:
            return False

        now = now or datetime.now(timezone.utc)
        self._cleanup(now)

        key = delivery_key(connection_id, raw_body, headers)
        if key in self.processed:
            return True

        self.processed[key] = now
        return False

    def release(self, connection_id: int, raw_body: bytes, headers: Mapping[str, str]) -> None:
        """Forget a delivery whose processing failed, so a redelivery runs"""
        key = delivery_key(connection_id, raw_body, headers)
        if self.processed.pop(key, None) is not None:
            logger.debug(f"Released delivery key {key}")
