# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Fixtures for API tests: an app on a temporary data dir with a fake
Taskade client behind the dispatcher.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from hookflow.core.config import Config
from hookflow.integrations.dispatch import ActionDispatcher
from hookflow.main import create_app
from hookflow.models.connection import ServiceName


@pytest.fixture
def taskade_client():
    client = MagicMock()
    client.create_task = AsyncMock(return_value={"id": "t1", "name": "task", "projectId": "p1"})
    client.update_task = AsyncMock(return_value={"id": "t1"})
    return client


@pytest.fixture
def app(temp_dir, taskade_client):
    config = Config(data_dir=str(temp_dir), public_base_url="https://hooks.example.com")
    dispatcher = ActionDispatcher({ServiceName.TASKADE: taskade_client})
    return create_app(config, dispatcher=dispatcher)


@pytest.fixture
def client(app):
    return TestClient(app)
