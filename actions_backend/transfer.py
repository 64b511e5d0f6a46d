from .config import ActionsConfig
from .errors import ActionPreconditionError
from .models import ActionGetResponse, ActionLinks, ActionParameter, ActionPostResponse, LinkedAction
from .params import format_amount, parse_account, validate_query_params
from .rpc import SolanaRpc
from .transactions import build_transaction, create_post_response, sol_to_lamports, transfer_instruction

ACTION_PATH = "/api/actions/transfer-sol"
PRESET_AMOUNTS = ("1", "5", "10")


class TransferActionProvider:
    """Builds native SOL transfers from the caller to a destination wallet."""

    def __init__(self, config: ActionsConfig, rpc: SolanaRpc):
        self.config = config
        self.rpc = rpc

    def get_metadata(self, url: str, origin: str) -> ActionGetResponse:
        params = validate_query_params(url, self.config)
        base_href = f"{origin}{ACTION_PATH}?to={params.destination}"

        actions = [
            LinkedAction(label=f"Send {amount} SOL", href=f"{base_href}&amount={amount}")
            for amount in PRESET_AMOUNTS
        ]
        # wallets render a text input for the {amount} placeholder
        actions.append(LinkedAction(
            label="Send SOL",
            href=f"{base_href}&amount={{amount}}",
            parameters=[
                ActionParameter(name="amount", label="Enter the amount of SOL to send", required=True),
            ],
        ))

        return ActionGetResponse(
            title="Actions Example - Transfer Native SOL",
            icon=f"{origin}{self.config.icon_path}",
            description="Transfer SOL to another Solana wallet",
            label="Transfer",  # ignored by wallets since links.actions exists
            links=ActionLinks(actions=actions),
        )

    async def build_transaction(self, url: str, body) -> ActionPostResponse:
        params = validate_query_params(url, self.config)
        account = parse_account(body)

        # accounts holding only SOL have 0 bytes of data
        minimum_balance = await self.rpc.get_minimum_balance_for_rent_exemption(0)
        lamports = sol_to_lamports(params.amount)
        if lamports < minimum_balance:
            raise ActionPreconditionError(f"account may not be rent exempt: {params.destination}")

        blockhash = await self.rpc.get_latest_blockhash()
        transaction = build_transaction(
            [transfer_instruction(account, params.destination, lamports)],
            account,
            blockhash,
        )

        return create_post_response(
            transaction,
            message=f"Send {format_amount(params.amount)} SOL to {params.destination}",
        )
