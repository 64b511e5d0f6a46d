import math
from dataclasses import dataclass
from typing import Any
from urllib.parse import parse_qs, urlsplit

from pydantic import ValidationError
from solders.pubkey import Pubkey

from .config import ActionsConfig
from .errors import INVALID_ACCOUNT_MESSAGE, ActionValidationError
from .models import ActionPostRequest


@dataclass(frozen=True)
class TransferRequestParams:
    amount: float
    destination: Pubkey


def _first(query: dict, name: str) -> str:
    values = query.get(name)
    return values[0] if values else ""


def validate_query_params(url: str, config: ActionsConfig) -> TransferRequestParams:
    """Read ``to`` and ``amount`` from the query string, falling back to defaults.

    Empty values count as absent.
    """
    query = parse_qs(urlsplit(url).query)
    destination = config.default_destination
    amount = config.default_amount

    to = _first(query, "to")
    if to:
        try:
            destination = Pubkey.from_string(to)
        except ValueError:
            raise ActionValidationError("Invalid input query parameter: to")

    raw_amount = _first(query, "amount")
    if raw_amount:
        try:
            amount = float(raw_amount)
        except ValueError:
            raise ActionValidationError("Invalid input query parameter: amount")
    if not math.isfinite(amount) or amount <= 0:
        raise ActionValidationError("Invalid input query parameter: amount")

    return TransferRequestParams(amount=amount, destination=destination)


def parse_account(body: Any) -> Pubkey:
    """Validate the POST body and return the caller's account."""
    try:
        request = ActionPostRequest.model_validate(body)
        return Pubkey.from_string(request.account)
    except (ValidationError, ValueError):
        raise ActionValidationError(INVALID_ACCOUNT_MESSAGE)


def format_amount(amount: float) -> str:
    """Render an amount the way it was typed: ``1`` not ``1.0``."""
    if amount.is_integer():
        return str(int(amount))
    return repr(amount)
