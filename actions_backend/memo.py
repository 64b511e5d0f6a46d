import logging

from .config import ActionsConfig
from .errors import HistoryScanError
from .history import HistoryScanner
from .models import ActionGetResponse, ActionPostResponse
from .params import parse_account
from .rpc import SolanaRpc
from .transactions import build_transaction, create_post_response, memo_instruction, priority_fee_instruction

logger = logging.getLogger(__name__)


class MemoActionProvider:
    """Posts a memo whose text depends on what the scan target logged recently.

    The initial message is posted until it shows up in the target's last
    window of history, after which the follow-up message is posted instead.
    """

    def __init__(self, config: ActionsConfig, rpc: SolanaRpc, scanner: HistoryScanner = None):
        self.config = config
        self.rpc = rpc
        self.scanner = scanner or HistoryScanner(rpc, page_size=config.history_page_size)

    def get_metadata(self, origin: str) -> ActionGetResponse:
        return ActionGetResponse(
            title="Actions Example - Simple On-chain Memo",
            icon=f"{origin}{self.config.icon_path}",
            description="Send a message on-chain using a Memo",
            label="Send Memo",
        )

    async def choose_message(self) -> str:
        config = self.config
        try:
            found = await self.scanner.scan(
                config.memo_scan_address, config.memo_initial_message, config.history_window
            )
        except HistoryScanError:
            logger.warning("Memo history scan failed, posting the initial message", exc_info=True)
            return config.memo_initial_message

        logger.info(f"Message found in last {config.history_window}: {found}")
        return config.memo_followup_message if found else config.memo_initial_message

    async def build_transaction(self, body) -> ActionPostResponse:
        account = parse_account(body)
        text = await self.choose_message()

        # the compute price instruction keeps the transaction from being memo-only
        instructions = [
            priority_fee_instruction(self.config.memo_compute_unit_price),
            memo_instruction(text),
        ]
        blockhash = await self.rpc.get_latest_blockhash()
        transaction = build_transaction(instructions, account, blockhash)

        return create_post_response(transaction, message="Post this memo on-chain")
