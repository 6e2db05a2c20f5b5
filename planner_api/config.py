### Description ###
# Planner Suite - Multi-tenant Event Planning Platform
# - API Configuration -
# Author: Planner Suite Team
# Date: 10/18/2026
# Python: 3.11
####################

"""
API Configuration Management

Uses Pydantic Settings for configuration with environment variable support.
Loads settings from .env file and data/config.yaml.

Config file location (in order of precedence):
1. PLANNER_CONFIG_PATH environment variable
2. data/config.yaml (default)
"""

import os
from functools import lru_cache
from pathlib import Path

import yaml
from pydantic_settings import BaseSettings


def get_project_root() -> Path:
    """Get the project root directory"""
    return Path(__file__).parent.parent


def get_config_path() -> Path:
    """
    Get the path to config.yaml.

    Priority:
    1. PLANNER_CONFIG_PATH environment variable (if set)
    2. data/config.yaml (default location)
    """
    env_path = os.environ.get("PLANNER_CONFIG_PATH")
    if env_path:
        return Path(env_path)

    return get_project_root() / "data" / "config.yaml"


def get_version() -> str:
    """Read version from VERSION file"""
    version_file = get_project_root() / "VERSION"
    if version_file.exists():
        return version_file.read_text().strip()
    return "1.0.0"


class APISettings(BaseSettings):
    """API Server Settings"""

    # API Configuration
    api_title: str = "Planner Suite API"
    api_version: str = get_version()
    api_prefix: str = "/api"
    debug: bool = False
    environment: str = "development"

    # Server Configuration
    host: str = "0.0.0.0"
    port: int = 3001
    cors_origins: list[str] = ["*"]

    # Credential store (async SQLAlchemy URL)
    database_url: str = "sqlite+aiosqlite:///./data/planner_suite.db"
    create_schema_on_startup: bool = True
    store_timeout_seconds: float = 5.0

    # Counter store (rate limiting + token blacklist). None = in-process only.
    redis_url: str | None = None
    redis_key_prefix: str = "planner-suite:"
    counter_timeout_seconds: float = 1.0

    # Credentials
    secret_key: str = "change-this-in-production-planner-suite-secret"
    token_algorithm: str = "HS256"
    token_expiry_seconds: int = 3600
    token_blacklist_enabled: bool = True

    # Tenant resolution
    tenant_header: str = "X-Tenant-Id"
    reserved_subdomains: list[str] = ["www", "api", "app", "admin"]

    # Identity policy
    strict_organization_check: bool = False

    # Logging
    log_level: str = "INFO"
    log_to_file: bool = True

    class Config:
        env_prefix = "PLANNER_"
        env_file = ".env"
        extra = "ignore"

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"


DEFAULT_CONFIG = """# Planner Suite Configuration
# Operational settings that are not secrets (secrets live in environment variables)

# Rate Limiting
# Each rule caps requests per caller key within a fixed window.
#   key: address  -> client address, scoped by tenant when one is resolved
#   key: identity -> authenticated user id (falls back to address)
rate_limits:
  auth_default:
    window_seconds: 900       # 15 minutes
    max_requests: 100
    key: address
  login:
    window_seconds: 900       # 15 minutes
    max_requests: 10
    key: address
  tenant_registration:
    window_seconds: 3600      # 1 hour
    max_requests: 5
    key: address
  password_reset:
    window_seconds: 3600      # 1 hour
    max_requests: 3
    key: address
"""


def load_yaml_config(config_path: str | None = None) -> dict:
    """Load configuration from YAML file, creating default if missing"""
    config_file = get_config_path() if config_path is None else Path(config_path)

    if not config_file.exists():
        config_file.parent.mkdir(parents=True, exist_ok=True)
        with open(config_file, "w", encoding="utf-8") as f:
            f.write(DEFAULT_CONFIG)

    with open(config_file, encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


@lru_cache
def get_api_settings() -> APISettings:
    """Get cached API settings instance"""
    return APISettings()


@lru_cache
def get_rate_limit_config() -> dict:
    """
    Get rate limit rule overrides from config.yaml.

    Returns a mapping of rule name -> {window_seconds, max_requests, key}.
    Missing rules fall back to the defaults in services.rate_limiter.
    """
    config = load_yaml_config()
    return config.get("rate_limits", {}) or {}
