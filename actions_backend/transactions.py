import base64
from typing import Optional, Sequence

from solders.compute_budget import set_compute_unit_price
from solders.hash import Hash
from solders.instruction import Instruction
from solders.message import Message
from solders.pubkey import Pubkey
from solders.system_program import TransferParams, transfer
from solders.transaction import Transaction

from .models import ActionPostResponse

MEMO_PROGRAM_ID = Pubkey.from_string("MemoSq4gqABAXKb96qnH8TysNcWxMyWCqXgDLGmfcHr")
LAMPORTS_PER_SOL = 1_000_000_000


def sol_to_lamports(amount: float) -> int:
    return round(amount * LAMPORTS_PER_SOL)


def memo_instruction(text: str) -> Instruction:
    # no signer keys attached
    return Instruction(MEMO_PROGRAM_ID, text.encode("utf-8"), [])


def priority_fee_instruction(micro_lamports: int) -> Instruction:
    return set_compute_unit_price(micro_lamports)


def transfer_instruction(from_pubkey: Pubkey, to_pubkey: Pubkey, lamports: int) -> Instruction:
    return transfer(TransferParams(from_pubkey=from_pubkey, to_pubkey=to_pubkey, lamports=lamports))


def build_transaction(instructions: Sequence[Instruction], fee_payer: Pubkey, recent_blockhash: Hash) -> Transaction:
    """Compile an unsigned transaction; signature slots are left zeroed."""
    message = Message.new_with_blockhash(list(instructions), fee_payer, recent_blockhash)
    return Transaction.new_unsigned(message)


def create_post_response(transaction: Transaction, message: Optional[str] = None) -> ActionPostResponse:
    """Serialize an unsigned transaction into the action POST envelope.

    Wallets reject memo-only transactions, so at least one instruction must
    target another program.
    """
    keys = transaction.message.account_keys
    instructions = transaction.message.instructions
    if not instructions:
        raise ValueError("Transaction must contain at least one instruction")
    if all(keys[ix.program_id_index] == MEMO_PROGRAM_ID for ix in instructions):
        raise ValueError("Transaction must contain at least one non-memo instruction")

    encoded = base64.b64encode(bytes(transaction)).decode("utf-8")
    return ActionPostResponse(transaction=encoded, message=message)
