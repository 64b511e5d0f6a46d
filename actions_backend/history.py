import logging
import time
from datetime import timedelta
from typing import Callable, List

from solders.pubkey import Pubkey
from solders.signature import Signature

from .errors import HistoryScanError
from .rpc import SolanaRpc

logger = logging.getLogger(__name__)


class HistoryScanner:
    """Search an address's recent transactions for a log marker.

    Signatures are paged newest first until a page reaches back to the start of
    the window, then the collected transactions are fetched in batches and their
    log lines searched for the marker as a substring.
    """

    def __init__(self, rpc: SolanaRpc, page_size: int = 100, clock: Callable[[], float] = time.time):
        self.rpc = rpc
        self.page_size = page_size
        self.clock = clock

    async def scan(self, address: Pubkey, marker: str, window: timedelta) -> bool:
        try:
            signatures = await self._collect_signatures(address, window)
            for start in range(0, len(signatures), self.page_size):
                batch = signatures[start:start + self.page_size]
                for logs in await self.rpc.get_transaction_logs(batch):
                    if any(marker in line for line in logs):
                        return True
            return False
        except Exception as e:
            raise HistoryScanError(f"History scan of {address} failed: {e}") from e

    async def _collect_signatures(self, address: Pubkey, window: timedelta) -> List[Signature]:
        window_start = self.clock() - window.total_seconds()
        collected = []
        before = None

        while True:
            page = await self.rpc.get_signatures_for_address(address, limit=self.page_size, before=before)
            if not page:
                break

            # missing block time counts as inside the window
            collected.extend(
                info.signature for info in page
                if info.block_time is None or info.block_time >= window_start
            )
            oldest = page[-1]
            before = oldest.signature

            if oldest.block_time is not None and oldest.block_time <= window_start:
                break

        logger.debug(f"Collected {len(collected)} signatures for {address}")
        return collected
