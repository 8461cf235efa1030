# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Hookflow Configuration - Single source of truth.
YAML for settings. Env vars only for secrets and deployment overrides.
"""

import os
import yaml
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


# Services that accept inbound webhooks and get a generated secret
WEBHOOK_SERVICES = ("github", "taskade", "notion")


# =============================================================================
# CONFIGURATION DATACLASS
# =============================================================================

@dataclass(frozen=True)
class Config:
    """
    Immutable application configuration.
    All values from YAML. No hidden state.
    """

    # -- Service --
    service_host: str = "0.0.0.0"
    service_port: int = 5000
    public_base_url: str = "http://localhost:5000"
    data_dir: str = "./data"

    # -- Logging --
    log_level: str = "INFO"
    log_format: str = "json"
    log_file: Optional[str] = None  # also write logs here when set

    # -- HTTP --
    http_timeout: float = 10.0

    # -- Webhook engine --
    action_timeout: float = 30.0
    credentials_ttl: int = 3600
    dedup_enabled: bool = True
    dedup_ttl_seconds: int = 86400

    # -- Target service APIs --
    github_api_url: str = "https://api.github.com"
    taskade_api_url: str = "https://www.taskade.com/api/v1"
    notion_api_url: str = "https://api.notion.com/v1"
    notion_version: str = "2022-06-28"
    slack_api_url: str = "https://slack.com/api"

    # -- Derived paths --
    @property
    def connections_dir(self) -> Path:
        return Path(self.data_dir) / "connections"

    @property
    def workflows_dir(self) -> Path:
        return Path(self.data_dir) / "workflows"

    @property
    def executions_dir(self) -> Path:
        return Path(self.data_dir) / "executions"


# =============================================================================
# LOADER
# =============================================================================

def load_config(path: str = "configs/hookflow.yaml") -> Config:
    """
    Load configuration from YAML.
    Returns defaults if file doesn't exist.
    """
    y = {}
    if Path(path).exists():
        with open(path) as f:
            y = yaml.safe_load(f) or {}

    defaults = Config()

    # Helper to safely navigate nested dicts
    def get(d: dict, *keys, default=None):
        for k in keys:
            if not isinstance(d, dict):
                return default
            d = d.get(k, {})
        return d if d != {} else default

    dedup_enabled = get(y, "webhooks", "dedup", "enabled")

    return Config(
        # Service
        service_host=get(y, "service", "host") or defaults.service_host,
        service_port=int(get(y, "service", "port") or defaults.service_port),
        public_base_url=(
            os.getenv("HOOKFLOW_PUBLIC_BASE_URL")
            or get(y, "service", "public_base_url")
            or defaults.public_base_url
        ),
        data_dir=os.getenv("HOOKFLOW_DATA_DIR") or get(y, "storage", "data_dir") or defaults.data_dir,

        # Logging
        log_level=os.getenv("LOG_LEVEL") or get(y, "logging", "level") or defaults.log_level,
        log_format=get(y, "logging", "format") or defaults.log_format,
        log_file=os.getenv("HOOKFLOW_LOG_FILE") or get(y, "logging", "file") or defaults.log_file,

        # HTTP
        http_timeout=float(get(y, "http", "timeout") or defaults.http_timeout),

        # Webhook engine
        action_timeout=float(get(y, "webhooks", "action_timeout") or defaults.action_timeout),
        credentials_ttl=int(get(y, "webhooks", "credentials_ttl") or defaults.credentials_ttl),
        dedup_enabled=defaults.dedup_enabled if dedup_enabled is None else bool(dedup_enabled),
        dedup_ttl_seconds=int(get(y, "webhooks", "dedup", "ttl_seconds") or defaults.dedup_ttl_seconds),

        # Target service APIs
        github_api_url=get(y, "integrations", "github", "api_url") or defaults.github_api_url,
        taskade_api_url=get(y, "integrations", "taskade", "api_url") or defaults.taskade_api_url,
        notion_api_url=get(y, "integrations", "notion", "api_url") or defaults.notion_api_url,
        notion_version=get(y, "integrations", "notion", "version") or defaults.notion_version,
        slack_api_url=get(y, "integrations", "slack", "api_url") or defaults.slack_api_url,
    )


# =============================================================================
# GLOBAL INSTANCE
# =============================================================================

_config: Optional[Config] = None


def get_config() -> Config:
    """Get or create global config instance."""
    global _config
    if _config is None:
        config_path = os.getenv("HOOKFLOW_CONFIG_PATH", "configs/hookflow.yaml")
        _config = load_config(config_path)
    return _config


def reload_config() -> Config:
    """Force reload configuration."""
    global _config
    _config = None
    return get_config()
