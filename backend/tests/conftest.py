# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Shared fixtures for Hookflow tests.
"""

import hashlib
import hmac
import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from tempfile import TemporaryDirectory

import pytest

# hookflow.main builds a default app at import; keep its data out of the repo
os.environ.setdefault("HOOKFLOW_DATA_DIR", tempfile.mkdtemp(prefix="hookflow-tests-"))

from hookflow.models.connection import Connection
from hookflow.models.workflow import Workflow
from hookflow.webhooks.models import WebhookEvent


def sign(secret: str, body: bytes) -> str:
    """GitHub-style X-Hub-Signature-256 value"""
    mac = hmac.new(secret.encode(), msg=body, digestmod=hashlib.sha256)
    return f"sha256={mac.hexdigest()}"


@pytest.fixture
def temp_dir():
    """Temporary directory removed after the test"""
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sign_body():
    return sign


@pytest.fixture
def workflow_factory():
    """Build a Workflow; defaults describe an active github.push -> taskade rule"""

    def make(**overrides) -> Workflow:
        now = datetime.now(timezone.utc)
        data = {
            "id": 1,
            "title": "Push to task",
            "source_service": "github",
            "target_service": "taskade",
            "target_connection_id": 2,
            "status": "active",
            "config": {
                "trigger": {"type": "webhook", "event": "github.push"},
                "filters": [],
                "actions": [
                    {
                        "type": "create_task",
                        "params": {
                            "title": "Commit: ${payload.head_commit.message}",
                            "description": "Pushed to ${payload.ref}",
                        },
                    }
                ],
            },
            "created_at": now,
            "updated_at": now,
        }
        data.update(overrides)
        return Workflow.model_validate(data)

    return make


@pytest.fixture
def connection_factory():
    def make(**overrides) -> Connection:
        now = datetime.now(timezone.utc)
        data = {
            "id": 1,
            "name": "GitHub",
            "service": "github",
            "api_token": "ghp_test",
            "webhook_secret": "s3cret",
            "created_at": now,
            "updated_at": now,
        }
        data.update(overrides)
        return Connection.model_validate(data)

    return make


@pytest.fixture
def push_event():
    return WebhookEvent(
        service="github",
        event="github.push",
        payload={
            "ref": "refs/heads/main",
            "head_commit": {"message": "Fix login bug"},
            "commits": [{"id": "abc123", "message": "Fix login bug"}],
        },
        timestamp=datetime(2025, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
    )
