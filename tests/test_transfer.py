"""Unit tests for TransferActionProvider."""

from unittest.mock import AsyncMock

import pytest
from solders.pubkey import Pubkey

from actions_backend.config import DEFAULT_SOL_ADDRESS
from actions_backend.errors import ActionPreconditionError, ActionValidationError
from actions_backend.transfer import TransferActionProvider

from conftest import CALLER, DESTINATION, decode_transaction, instruction_data

ORIGIN = "http://test"
URL = f"{ORIGIN}/api/actions/transfer-sol"
SYSTEM_PROGRAM_ID = Pubkey.from_string("11111111111111111111111111111111")


class TestMetadata:
    def test_default_destination(self, config, rpc):
        meta = TransferActionProvider(config, rpc).get_metadata(URL, ORIGIN)
        hrefs = [action.href for action in meta.links.actions]
        assert hrefs == [
            f"{URL}?to={DEFAULT_SOL_ADDRESS}&amount=1",
            f"{URL}?to={DEFAULT_SOL_ADDRESS}&amount=5",
            f"{URL}?to={DEFAULT_SOL_ADDRESS}&amount=10",
            f"{URL}?to={DEFAULT_SOL_ADDRESS}&amount={{amount}}",
        ]

    def test_custom_amount_parameter(self, config, rpc):
        meta = TransferActionProvider(config, rpc).get_metadata(f"{URL}?to={DESTINATION}", ORIGIN)
        custom = meta.links.actions[-1]
        assert custom.label == "Send SOL"
        assert custom.href.startswith(f"{URL}?to={DESTINATION}")
        [param] = custom.parameters
        assert param.name == "amount"
        assert param.required is True
        assert [a.label for a in meta.links.actions[:3]] == ["Send 1 SOL", "Send 5 SOL", "Send 10 SOL"]

    def test_invalid_amount(self, config, rpc):
        with pytest.raises(ActionValidationError, match="amount"):
            TransferActionProvider(config, rpc).get_metadata(f"{URL}?amount=0", ORIGIN)


class TestBuildTransaction:
    @pytest.mark.asyncio
    async def test_transfer(self, config, rpc, blockhash):
        provider = TransferActionProvider(config, rpc)
        resp = await provider.build_transaction(f"{URL}?to={DESTINATION}&amount=1", {"account": CALLER})

        assert resp.message == f"Send 1 SOL to {DESTINATION}"
        tx = decode_transaction(resp.transaction)
        assert tx.message.account_keys[0] == Pubkey.from_string(CALLER)
        assert Pubkey.from_string(DESTINATION) in tx.message.account_keys
        assert tx.message.recent_blockhash == blockhash
        [data] = instruction_data(tx, SYSTEM_PROGRAM_ID)
        assert int.from_bytes(data[4:12], "little") == 1_000_000_000
        rpc.get_minimum_balance_for_rent_exemption.assert_awaited_once_with(0)

    @pytest.mark.asyncio
    async def test_default_amount(self, config, rpc):
        resp = await TransferActionProvider(config, rpc).build_transaction(URL, {"account": CALLER})
        assert resp.message == f"Send 0.1 SOL to {DEFAULT_SOL_ADDRESS}"

    @pytest.mark.asyncio
    async def test_not_rent_exempt(self, config, rpc):
        provider = TransferActionProvider(config, rpc)
        with pytest.raises(ActionPreconditionError) as exc:
            await provider.build_transaction(f"{URL}?to={DESTINATION}&amount=0.0001", {"account": CALLER})
        assert exc.value.message == f"account may not be rent exempt: {DESTINATION}"
        rpc.get_latest_blockhash.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_exactly_rent_exempt(self, config, rpc):
        rpc.get_minimum_balance_for_rent_exemption = AsyncMock(return_value=100_000_000)
        resp = await TransferActionProvider(config, rpc).build_transaction(URL, {"account": CALLER})
        assert resp.transaction

    @pytest.mark.asyncio
    async def test_query_checked_before_account(self, config, rpc):
        provider = TransferActionProvider(config, rpc)
        with pytest.raises(ActionValidationError, match="to"):
            await provider.build_transaction(f"{URL}?to=bad", {"account": "also bad"})
