import logging
import os
from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

from dotenv import load_dotenv
from solders.pubkey import Pubkey

# Load environment variables
load_dotenv()

DEVNET_RPC_URL = "https://api.devnet.solana.com"

# devnet wallet
DEFAULT_SOL_ADDRESS = "AEzZqXyPxWJrjrauScDWMyewnWhv6XwmwqGdXD5vDVd4"
DEFAULT_SOL_AMOUNT = 0.1

DEFAULT_INITIAL_MESSAGE = "initial message"
DEFAULT_FOLLOWUP_MESSAGE = "second message"


@dataclass(frozen=True)
class ActionsConfig:
    """Fixed values shared by the action providers. Built once at startup."""

    rpc_url: str = DEVNET_RPC_URL
    rpc_timeout: float = 10.0
    rpc_max_concurrency: int = 8
    default_destination: Pubkey = Pubkey.from_string(DEFAULT_SOL_ADDRESS)
    default_amount: float = DEFAULT_SOL_AMOUNT
    memo_scan_address: Pubkey = Pubkey.from_string(DEFAULT_SOL_ADDRESS)
    memo_initial_message: str = DEFAULT_INITIAL_MESSAGE
    memo_followup_message: str = DEFAULT_FOLLOWUP_MESSAGE
    memo_compute_unit_price: int = 1000  # micro-lamports
    history_page_size: int = 100
    history_window: timedelta = timedelta(hours=24)
    icon_path: str = "/bun_blink.webp"

    @classmethod
    def from_env(cls) -> "ActionsConfig":
        default_address = os.getenv("DEFAULT_SOL_ADDRESS", DEFAULT_SOL_ADDRESS)
        default_amount = float(os.getenv("DEFAULT_SOL_AMOUNT", str(DEFAULT_SOL_AMOUNT)))
        if default_amount <= 0:
            raise ValueError("DEFAULT_SOL_AMOUNT must be positive")
        page_size = int(os.getenv("HISTORY_PAGE_SIZE", "100"))
        if not 1 <= page_size <= 1000:
            raise ValueError("HISTORY_PAGE_SIZE must be between 1 and 1000")
        window_hours = float(os.getenv("HISTORY_WINDOW_HOURS", "24"))
        if window_hours <= 0:
            raise ValueError("HISTORY_WINDOW_HOURS must be positive")
        max_concurrency = int(os.getenv("SOLANA_RPC_MAX_CONCURRENCY", "8"))
        if max_concurrency < 1:
            raise ValueError("SOLANA_RPC_MAX_CONCURRENCY must be at least 1")

        return cls(
            # empty SOLANA_RPC falls back to devnet as well
            rpc_url=os.getenv("SOLANA_RPC") or DEVNET_RPC_URL,
            rpc_timeout=float(os.getenv("SOLANA_RPC_TIMEOUT", "10")),
            rpc_max_concurrency=max_concurrency,
            default_destination=Pubkey.from_string(default_address),
            default_amount=default_amount,
            memo_scan_address=Pubkey.from_string(os.getenv("MEMO_SCAN_ADDRESS", default_address)),
            memo_initial_message=os.getenv("MEMO_INITIAL_MESSAGE", DEFAULT_INITIAL_MESSAGE),
            memo_followup_message=os.getenv("MEMO_FOLLOWUP_MESSAGE", DEFAULT_FOLLOWUP_MESSAGE),
            memo_compute_unit_price=int(os.getenv("MEMO_COMPUTE_UNIT_PRICE", "1000")),
            history_page_size=page_size,
            history_window=timedelta(hours=window_hours),
            icon_path=os.getenv("ICON_PATH", "/bun_blink.webp"),
        )


def configure_logging(level: Optional[str] = None):
    level = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
