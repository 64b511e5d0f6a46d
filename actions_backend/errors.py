"""Error kinds raised while serving an action.

Every kind maps to a plain-text HTTP response; ``status_code`` picks the status.
"""


class ActionError(Exception):
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ActionValidationError(ActionError):
    """Caller supplied a malformed account or query parameter."""


class ActionPreconditionError(ActionError):
    """Input was well formed but the chain state rules the request out."""


class UpstreamError(ActionError):
    """The Solana RPC node failed or returned an error."""


class HistoryScanError(UpstreamError):
    """A lookup failed while scanning address history."""


UNKNOWN_ERROR_MESSAGE = "An unknown error occurred"
INVALID_ACCOUNT_MESSAGE = 'Invalid "account" provided'
