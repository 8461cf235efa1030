# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Tests for delivery deduplication
"""

from datetime import datetime, timedelta, timezone

from hookflow.webhooks.dedup import DeliveryDeduplicator, delivery_key


class TestDeliveryKey:

    def test_prefers_delivery_header(self):
        key = delivery_key(1, b"{}", {"X-GitHub-Delivery": "72d3162e"})
        assert key == "1:72d3162e"

    def test_body_hash_without_header(self):
        assert delivery_key(1, b'{"a":1}', {}) == delivery_key(1, b'{"a":1}', {})
        assert delivery_key(1, b'{"a":1}', {}) != delivery_key(1, b'{"a":2}', {})

    def test_scoped_to_connection(self):
        assert delivery_key(1, b"{}", {}) != delivery_key(2, b"{}", {})
        assert delivery_key(1, b"{}", {"X-GitHub-Delivery": "d"}) != delivery_key(2, b"{}", {"X-GitHub-Delivery": "d"})


class TestDeliveryDeduplicator:

    def test_first_delivery_is_not_duplicate(self):
        dedup = DeliveryDeduplicator()
        assert dedup.is_duplicate(1, b"{}", {"X-GitHub-Delivery": "a"}) is False

    def test_redelivery_is_duplicate(self):
        dedup = DeliveryDeduplicator()
        dedup.is_duplicate(1, b"{}", {"X-GitHub-Delivery": "a"})

        assert dedup.is_duplicate(1, b"{}", {"X-GitHub-Delivery": "a"}) is True
        assert dedup.is_duplicate(1, b"{}", {"X-GitHub-Delivery": "b"}) is False

    def test_expired_keys_are_forgotten(self):
        dedup = DeliveryDeduplicator(ttl_seconds=60)
        start = datetime(2025, 1, 1, tzinfo=timezone.utc)

        dedup.is_duplicate(1, b"{}", {}, now=start)

        assert dedup.is_duplicate(1, b"{}", {}, now=start + timedelta(seconds=30)) is True
        assert dedup.is_duplicate(1, b"{}", {}, now=start + timedelta(seconds=200)) is False

    def test_disabled(self):
        dedup = DeliveryDeduplicator(enabled=False)
        dedup.is_duplicate(1, b"{}", {})

        assert dedup.is_duplicate(1, b"{}", {}) is False
        assert dedup.processed == {}

    def test_released_delivery_is_accepted_again(self):
        dedup = DeliveryDeduplicator()
        dedup.is_duplicate(1, b"{}", {"X-GitHub-Delivery": "a"})

        dedup.release(1, b"{}", {"X-GitHub-Delivery": "a"})

        assert dedup.is_duplicate(1, b"{}", {"X-GitHub-Delivery": "a"}) is False

    def test_release_unknown_delivery(self):
        dedup = DeliveryDeduplicator()

        dedup.release(1, b"{}", {"X-GitHub-Delivery": "never-seen"})

        assert dedup.processed == {}
