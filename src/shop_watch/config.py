"""Configuration management."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml
from dotenv import find_dotenv, load_dotenv

from shop_watch.errors import ConfigError


@dataclass
class RetryConfig:
    """Retry settings shared by every network call site."""
    attempts: int = 3
    delay: float = 1.0


@dataclass
class SlackConfig:
    """Slack Web API settings."""
    api_url: str = "https://slack.com/api"
    block_limit: int = 50
    timeout: float = 30.0


@dataclass
class CdnConfig:
    """Asset host settings."""
    upload_url: str = "https://cdn.hackclub.com/api/v3/new"
    token: str = "beans"
    timeout: float = 60.0


@dataclass
class ShopConfig:
    """Storefront settings."""
    url: str = "https://summer.hackclub.com/shop"
    cookie_name: str = "_journey_session"
    timeout: float = 30.0


@dataclass
class ScheduleConfig:
    """Recurring trigger settings."""
    cron: str = "* * * * *"
    run_on_start: bool = True


@dataclass
class PathsConfig:
    """Path settings."""
    old_items_path: Path = Path("items.json")
    blocks_log_path: Optional[Path] = None


@dataclass
class Settings:
    """Application settings."""

    # Secrets and ids (from environment only)
    som_cookie: str = ""
    slack_channel_id: str = ""
    slack_xoxb: str = ""
    slack_usergroup_id: str = ""
    sentry_dsn: Optional[str] = None
    log_level: str = "INFO"

    # Config sections
    retry: RetryConfig = field(default_factory=RetryConfig)
    slack: SlackConfig = field(default_factory=SlackConfig)
    cdn: CdnConfig = field(default_factory=CdnConfig)
    shop: ShopConfig = field(default_factory=ShopConfig)
    schedule: ScheduleConfig = field(default_factory=ScheduleConfig)
    paths: PathsConfig = field(default_factory=PathsConfig)

    @property
    def old_items_path(self) -> Path:
        return self.paths.old_items_path

    @property
    def blocks_log_path(self) -> Optional[Path]:
        return self.paths.blocks_log_path

    def validate(self) -> None:
        """Fail fast when a required value is missing.

        Raises:
            ConfigError: Naming every missing environment variable.
        """
        required = {
            "SOM_COOKIE": self.som_cookie,
            "SLACK_CHANNEL_ID": self.slack_channel_id,
            "SLACK_XOXB": self.slack_xoxb,
            "SLACK_USERGROUP_ID": self.slack_usergroup_id,
        }
        missing = [name for name, value in required.items() if not value]
        if missing:
            raise ConfigError(f"Missing required environment variables: {', '.join(missing)}")

        if self.retry.attempts < 1:
            raise ConfigError("retry.attempts must be at least 1")
        if self.slack.block_limit < 1:
            raise ConfigError("slack.block_limit must be at least 1")


def load_config(config_path: Path = Path("config.yaml")) -> dict:
    """Load configuration from YAML file."""
    if not config_path.exists():
        return {}

    with open(config_path, "r", encoding="utf-8") as f:
        try:
            return yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Could not parse {config_path}: {e}") from e


def _apply_section(target: object, values: dict, section: str) -> None:
    for key, value in values.items():
        if not hasattr(target, key):
            raise ConfigError(f"Unknown option {section}.{key}")
        setattr(target, key, value)


def get_settings(config_path: Path = Path("config.yaml")) -> Settings:
    """Get application settings from YAML config and environment."""
    load_dotenv(find_dotenv(usecwd=True))

    # Load YAML config
    config = load_config(config_path)

    settings = Settings(
        som_cookie=os.getenv("SOM_COOKIE", ""),
        slack_channel_id=os.getenv("SLACK_CHANNEL_ID", ""),
        slack_xoxb=os.getenv("SLACK_XOXB", ""),
        slack_usergroup_id=os.getenv("SLACK_USERGROUP_ID", ""),
        sentry_dsn=os.getenv("SENTRY_DSN") or None,
        log_level=os.getenv("LOG_LEVEL", "INFO"),
    )

    # Apply YAML config
    for section in ("retry", "slack", "cdn", "shop", "schedule"):
        if section in config:
            _apply_section(getattr(settings, section), config[section], section)

    if "paths" in config:
        for key, value in config["paths"].items():
            _apply_section(settings.paths, {key: Path(value) if value else None}, "paths")

    # Environment wins over YAML for paths
    old_items_path = os.getenv("OLD_ITEMS_PATH")
    if old_items_path:
        settings.paths.old_items_path = Path(old_items_path)

    blocks_log_path = os.getenv("BLOCKS_LOG_PATH")
    if blocks_log_path:
        settings.paths.blocks_log_path = Path(blocks_log_path)

    return settings
