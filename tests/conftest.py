import base64
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from solders.hash import Hash
from solders.pubkey import Pubkey
from solders.signature import Signature
from solders.transaction import Transaction

from actions_backend.config import ActionsConfig

NOW = 1_700_000_000
DAY = 24 * 60 * 60

CALLER = str(Pubkey(bytes([7] * 32)))
DESTINATION = str(Pubkey(bytes([9] * 32)))
RENT_EXEMPT_MINIMUM = 890_880


def sig_info(block_time):
    """Signature listing entry as returned by getSignaturesForAddress."""
    return SimpleNamespace(signature=Signature.new_unique(), block_time=block_time)


def decode_transaction(encoded: str) -> Transaction:
    return Transaction.from_bytes(base64.b64decode(encoded))


def instruction_data(tx: Transaction, program_id: Pubkey):
    keys = tx.message.account_keys
    return [bytes(ix.data) for ix in tx.message.instructions if keys[ix.program_id_index] == program_id]


@pytest.fixture
def config():
    return ActionsConfig()


@pytest.fixture
def blockhash():
    return Hash.new_unique()


@pytest.fixture
def rpc(blockhash):
    """RPC stand-in with an empty address history."""
    mock = MagicMock()
    mock.get_signatures_for_address = AsyncMock(return_value=[])
    mock.get_transaction_logs = AsyncMock(return_value=[])
    mock.get_latest_blockhash = AsyncMock(return_value=blockhash)
    mock.get_minimum_balance_for_rent_exemption = AsyncMock(return_value=RENT_EXEMPT_MINIMUM)
    return mock
