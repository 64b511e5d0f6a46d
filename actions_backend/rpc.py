import asyncio
import logging
from typing import List, Optional, Sequence

from solana.exceptions import SolanaRpcException
from solana.rpc.async_api import AsyncClient
from solana.rpc.commitment import Finalized
from solana.rpc.core import RPCException
from solders.hash import Hash
from solders.pubkey import Pubkey
from solders.rpc.responses import RpcConfirmedTransactionStatusWithSignature
from solders.signature import Signature

from .errors import UpstreamError

logger = logging.getLogger(__name__)


class SolanaRpc:
    """Thin async wrapper over the solana-py client.

    Exposes only the four lookups the actions need and turns client failures
    into ``UpstreamError``.
    """

    def __init__(self, endpoint: str, timeout: float = 10.0, max_concurrency: int = 8):
        self.endpoint = endpoint
        self.max_concurrency = max_concurrency
        self._client = AsyncClient(endpoint, timeout=timeout)

    async def close(self):
        await self._client.close()

    async def get_signatures_for_address(
        self,
        address: Pubkey,
        limit: int,
        before: Optional[Signature] = None,
    ) -> List[RpcConfirmedTransactionStatusWithSignature]:
        logger.debug(f"getSignaturesForAddress {address} before={before} limit={limit}")
        try:
            resp = await self._client.get_signatures_for_address(address, before=before, limit=limit)
        except (RPCException, SolanaRpcException) as e:
            raise UpstreamError(f"Failed to list signatures for {address}: {e}") from e
        return resp.value

    async def get_transaction_logs(self, signatures: Sequence[Signature]) -> List[List[str]]:
        """Fetch each transaction and return its log lines, in request order.

        Transactions the node no longer has, or that carry no meta, yield ``[]``.
        At most ``max_concurrency`` requests are in flight at once.
        """
        limit = asyncio.Semaphore(self.max_concurrency)

        async def fetch(sig):
            async with limit:
                return await self._client.get_transaction(sig, max_supported_transaction_version=0)

        tasks = [asyncio.ensure_future(fetch(sig)) for sig in signatures]
        try:
            responses = await asyncio.gather(*tasks)
        except (RPCException, SolanaRpcException) as e:
            raise UpstreamError(f"Failed to fetch transactions: {e}") from e
        finally:
            # one failure abandons the batch; reap the rest so none keeps running
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)

        logs = []
        for resp in responses:
            tx = resp.value
            meta = tx.transaction.meta if tx is not None else None
            logs.append(list(meta.log_messages or []) if meta is not None else [])
        return logs

    async def get_latest_blockhash(self) -> Hash:
        try:
            resp = await self._client.get_latest_blockhash(Finalized)
        except (RPCException, SolanaRpcException) as e:
            raise UpstreamError(f"Failed to get blockhash: {e}") from e
        if not resp or not resp.value:
            raise UpstreamError("Failed to get recent blockhash from Solana RPC")
        return resp.value.blockhash

    async def get_minimum_balance_for_rent_exemption(self, data_size: int) -> int:
        try:
            resp = await self._client.get_minimum_balance_for_rent_exemption(data_size)
        except (RPCException, SolanaRpcException) as e:
            raise UpstreamError(f"Failed to get rent exemption minimum: {e}") from e
        return resp.value
