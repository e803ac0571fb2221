"""Scheduler for periodically refreshing the Public Suffix List."""
import asyncio
import logging
from typing import Optional

from fasttld.config import settings
from fasttld.errors import RefreshFailedError
from fasttld.extractor import FastTLD

logger = logging.getLogger(__name__)


class RefreshScheduler:
    """Scheduler that re-downloads the suffix list and swaps in a new trie."""

    def __init__(self, extractor: FastTLD, interval_seconds: Optional[int] = None):
        self.extractor = extractor
        self.interval_seconds = (
            settings.refresh_interval_seconds if interval_seconds is None else interval_seconds
        )
        self.running = False
        self.refresh_count = 0
        self.error_count = 0

    async def refresh_once(self) -> bool:
        """
        Run one refresh without blocking the event loop.

        Returns:
            True if a new trie was published
        """
        try:
            await asyncio.to_thread(self.extractor.refresh)
        except RefreshFailedError as e:
            self.error_count += 1
            logger.error(f"Suffix list refresh failed, keeping current trie: {e}")
            return False

        self.refresh_count += 1
        return True

    async def run(self) -> None:
        """Run refresh scheduler loop."""
        if not self.extractor.is_managed:
            logger.info("Custom suffix list in use, refresh scheduler not started")
            return

        logger.info(f"Starting suffix list refresh scheduler (interval: {self.interval_seconds}s)")

        self.running = True

        while self.running:
            # The extractor starts from a current cache, so sleep before the first refresh
            await asyncio.sleep(self.interval_seconds)
            if not self.running:
                break
            try:
                await self.refresh_once()
            except Exception as e:
                logger.error(f"Error in refresh scheduler: {e}", exc_info=True)

    def stop(self) -> None:
        """Stop the refresh scheduler."""
        self.running = False
