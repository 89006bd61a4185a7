"""CLI entry point for shop watch."""

import asyncio
import logging
from pathlib import Path
from typing import Optional

import sentry_sdk
import typer

from shop_watch.adapters.assets import CdnClient
from shop_watch.adapters.notifications import SlackBlockRenderer, SlackClient
from shop_watch.adapters.sources import ShopSource
from shop_watch.config import Settings, get_settings
from shop_watch.core import AssetRelocator, SnapshotStore
from shop_watch.errors import ConfigError
from shop_watch.scheduler import RunScheduler, run_guarded
from shop_watch.use_cases import ShopMonitorService


logger = logging.getLogger(__name__)


def setup_logging(level_name: str) -> None:
    level = getattr(logging, level_name.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def setup_sentry(settings: Settings) -> None:
    """Enable error reporting when a DSN is configured."""
    if not settings.sentry_dsn:
        return
    sentry_sdk.init(
        dsn=settings.sentry_dsn,
        send_default_pii=True,
        traces_sample_rate=1.0,
    )


def build_service(settings: Settings) -> ShopMonitorService:
    """Wire adapters into the monitoring service."""
    source = ShopSource(
        cookie=settings.som_cookie,
        url=settings.shop.url,
        cookie_name=settings.shop.cookie_name,
        timeout=settings.shop.timeout,
    )
    cdn = CdnClient(
        upload_url=settings.cdn.upload_url,
        token=settings.cdn.token,
        timeout=settings.cdn.timeout,
        retry_attempts=settings.retry.attempts,
        retry_delay=settings.retry.delay,
    )
    slack = SlackClient(
        token=settings.slack_xoxb,
        api_url=settings.slack.api_url,
        timeout=settings.slack.timeout,
    )

    return ShopMonitorService(
        source=source,
        relocator=AssetRelocator(cdn),
        store=SnapshotStore(settings.old_items_path),
        messenger=slack,
        renderer=SlackBlockRenderer(),
        channel_id=settings.slack_channel_id,
        usergroup_id=settings.slack_usergroup_id,
        block_limit=settings.slack.block_limit,
        blocks_log_path=settings.blocks_log_path,
        retry_attempts=settings.retry.attempts,
        retry_delay=settings.retry.delay,
    )


def main(
    once: bool = typer.Option(False, "--once", help="Run a single check and exit"),
    config: Path = typer.Option(Path("config.yaml"), "--config", help="Path to YAML config"),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Override LOG_LEVEL"),
) -> None:
    """Watch the shop and post changes to Slack."""
    try:
        settings = get_settings(config)
        setup_logging(log_level or settings.log_level)
        settings.validate()
    except ConfigError as e:
        typer.echo(f"❌ Configuration error: {e}", err=True)
        raise typer.Exit(code=1)

    setup_sentry(settings)
    service = build_service(settings)

    if once:
        ok = asyncio.run(run_guarded(service.run))
        raise typer.Exit(code=0 if ok else 1)

    scheduler = RunScheduler(
        service.run,
        cron=settings.schedule.cron,
        run_on_start=settings.schedule.run_on_start,
    )
    exit_code = asyncio.run(scheduler.serve())
    raise typer.Exit(code=exit_code)


def app() -> None:
    """CLI entry point."""
    typer.run(main)


if __name__ == "__main__":
    app()
