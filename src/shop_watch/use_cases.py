"""Business logic use cases."""

import json
import logging
from pathlib import Path
from typing import Any, Optional

from shop_watch.core import (
    AssetRelocator,
    BlockRenderer,
    DeltaEntry,
    DeltaKind,
    Item,
    ItemSource,
    MessagingClient,
    RunResult,
    RunState,
    SnapshotStore,
)
from shop_watch.core.composer import (
    SLACK_BLOCK_LIMIT,
    chunk_blocks,
    flatten_blocks,
    render_entries,
    summary_text,
    titles_by_kind,
)
from shop_watch.core.diff import classify, diff_snapshots, should_escalate
from shop_watch.errors import DeliveryError
from shop_watch.retry import DEFAULT_ATTEMPTS, DEFAULT_DELAY, retry


logger = logging.getLogger(__name__)


class ShopMonitorService:
    """Run one fetch → diff → notify → persist cycle.

    The service never swallows errors: any failure propagates to the caller
    and the baseline is left exactly as the last successful run wrote it.
    """

    def __init__(
        self,
        source: ItemSource,
        relocator: AssetRelocator,
        store: SnapshotStore,
        messenger: MessagingClient,
        renderer: BlockRenderer,
        channel_id: str,
        usergroup_id: str,
        block_limit: int = SLACK_BLOCK_LIMIT,
        blocks_log_path: Optional[Path] = None,
        retry_attempts: int = DEFAULT_ATTEMPTS,
        retry_delay: float = DEFAULT_DELAY,
    ) -> None:
        self.source = source
        self.relocator = relocator
        self.store = store
        self.messenger = messenger
        self.renderer = renderer
        self.channel_id = channel_id
        self.usergroup_id = usergroup_id
        self.block_limit = block_limit
        self.blocks_log_path = blocks_log_path
        self.retry_attempts = retry_attempts
        self.retry_delay = retry_delay
        self.state = RunState.DONE

    async def run(self) -> RunResult:
        """Execute a full run."""
        try:
            return await self._run()
        except Exception:
            self.state = RunState.FAILED
            raise

    async def _run(self) -> RunResult:
        self.state = RunState.FETCHING
        current = await self._retry(self.source.fetch_items)
        await self.relocator.relocate_images(current)

        if not self.store.exists():
            self.state = RunState.BOOTSTRAP
            self.store.save(current)
            logger.info("👋 First sync successful! Writing to `%s`", self.store.path)
            self.state = RunState.DONE
            return RunResult(bootstrapped=True)

        baseline = self.store.load()

        self.state = RunState.DIFFING
        entries = diff_snapshots(baseline, current)
        if not entries:
            logger.info("✨ No shop updates detected.")
            self._persist(current)
            return RunResult()

        self.state = RunState.COMPOSING
        result = self.compose(entries)
        logger.info("📰 %d updates found.", len(entries))

        self.state = RunState.DELIVERING
        result.messages_sent = await self.deliver(result)

        self._persist(current)
        result.state = self.state
        logger.info("🙌 Run completed!")
        return result

    def compose(self, entries: list[DeltaEntry]) -> RunResult:
        """Render entries, decide on escalation and write the audit log."""
        rendered = render_entries(entries, self.renderer)
        if self.blocks_log_path:
            self._write_blocks_log(rendered)

        titles = titles_by_kind(entries)
        return RunResult(
            state=RunState.COMPOSING,
            blocks=flatten_blocks(rendered),
            new_titles=titles[DeltaKind.NEW],
            updated_titles=titles[DeltaKind.UPDATED],
            deleted_titles=titles[DeltaKind.DELETED],
            escalate=should_escalate(classify(entries)),
        )

    async def deliver(self, result: RunResult) -> int:
        """Send block chunks in order, then the escalation ping if flagged.

        Returns:
            Number of messages sent.
        """
        text = summary_text(result.new_titles, result.updated_titles, result.deleted_titles)
        sent = 0

        for chunk in chunk_blocks(result.blocks, self.block_limit):
            await self._retry(lambda chunk=chunk: self._send(text, chunk))
            sent += 1

        if result.escalate:
            ping = self.renderer.usergroup_ping(self.usergroup_id)
            await self._retry(lambda: self._send(text, ping))
            sent += 1

        return sent

    async def _send(self, text: str, blocks: list[dict[str, Any]]) -> None:
        response = await self.messenger.post_message(
            text,
            blocks,
            self.channel_id,
            unfurl_links=False,
            unfurl_media=False,
        )
        if not response.get("ok"):
            raise DeliveryError(f"Failed to send chunked Slack message: {response.get('error')}")

    def _persist(self, items: list[Item]) -> None:
        self.state = RunState.PERSISTING
        self.store.save(items)
        self.state = RunState.DONE

    def _write_blocks_log(self, rendered: list[list[dict[str, Any]]]) -> None:
        assert self.blocks_log_path is not None
        self.blocks_log_path.parent.mkdir(parents=True, exist_ok=True)
        self.blocks_log_path.write_text(
            json.dumps(rendered, indent=2, ensure_ascii=False),
            encoding="utf-8",
        )
        logger.debug("Blocks written to %s", self.blocks_log_path)

    async def _retry(self, fn):
        return await retry(fn, attempts=self.retry_attempts, delay=self.retry_delay)
