# Solana Actions backend
#
# Run with:  python -m actions_backend.backend
# or:        uvicorn actions_backend.backend:app

import logging
import os
from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from . import __version__
from .config import ActionsConfig, configure_logging
from .errors import UNKNOWN_ERROR_MESSAGE, ActionError, UpstreamError
from .memo import MemoActionProvider
from .models import ACTIONS_CORS_HEADERS, ActionRule, ActionsJson
from .rpc import SolanaRpc
from .transfer import ACTION_PATH as TRANSFER_PATH
from .transfer import TransferActionProvider

MEMO_PATH = "/api/actions/memo"

logger = logging.getLogger(__name__)

settings = ActionsConfig.from_env()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    configure_logging()
    app.state.rpc = SolanaRpc(
        settings.rpc_url, timeout=settings.rpc_timeout, max_concurrency=settings.rpc_max_concurrency
    )
    logger.info(f"Using Solana RPC {settings.rpc_url}")
    yield
    # Shutdown
    await app.state.rpc.close()


app = FastAPI(
    title="Solana Actions",
    description="Builds unsigned memo and SOL transfer transactions for wallets to sign",
    version=__version__,
    lifespan=lifespan,
)


def get_config() -> ActionsConfig:
    return settings


def get_rpc(request: Request) -> SolanaRpc:
    return request.app.state.rpc


def get_memo_provider(config: ActionsConfig = Depends(get_config), rpc: SolanaRpc = Depends(get_rpc)):
    return MemoActionProvider(config, rpc)


def get_transfer_provider(config: ActionsConfig = Depends(get_config), rpc: SolanaRpc = Depends(get_rpc)):
    return TransferActionProvider(config, rpc)


def request_origin(request: Request) -> str:
    return f"{request.url.scheme}://{request.url.netloc}"


def actions_json_response(payload) -> JSONResponse:
    return JSONResponse(payload.model_dump(exclude_none=True, by_alias=True), headers=ACTIONS_CORS_HEADERS)


@app.exception_handler(ActionError)
async def action_error_handler(request: Request, exc: ActionError):
    if isinstance(exc, UpstreamError):
        logger.warning(f"{request.method} {request.url.path} failed upstream: {exc.message}")
    return PlainTextResponse(exc.message, status_code=exc.status_code, headers=ACTIONS_CORS_HEADERS)


def unknown_error(request: Request) -> ActionError:
    logger.exception(f"{request.method} {request.url.path} failed")
    return ActionError(UNKNOWN_ERROR_MESSAGE)


# Preflight for every action route. Wallets read the CORS headers only.
async def actions_options():
    return Response(status_code=200, headers=ACTIONS_CORS_HEADERS)


for path in ("/actions.json", MEMO_PATH, TRANSFER_PATH):
    app.add_api_route(path, actions_options, methods=["OPTIONS"], include_in_schema=False)


@app.get("/actions.json", summary="Actions rules mapping")
async def actions_json():
    """Tell clients which website paths map to action API paths"""
    return actions_json_response(ActionsJson(rules=[
        ActionRule(path_pattern="/*", api_path="/api/actions/*"),
        ActionRule(path_pattern="/api/actions/**", api_path="/api/actions/**"),
    ]))


@app.get(MEMO_PATH, summary="Describe the memo action")
async def memo_metadata(request: Request, provider: MemoActionProvider = Depends(get_memo_provider)):
    try:
        return actions_json_response(provider.get_metadata(request_origin(request)))
    except ActionError:
        raise
    except Exception:
        raise unknown_error(request)


@app.post(MEMO_PATH, summary="Build a memo transaction")
async def memo_transaction(request: Request, provider: MemoActionProvider = Depends(get_memo_provider)):
    """Return an unsigned memo transaction with the caller as fee payer"""
    try:
        body = await request.json()
        return actions_json_response(await provider.build_transaction(body))
    except ActionError:
        raise
    except Exception:
        raise unknown_error(request)


@app.get(TRANSFER_PATH, summary="Describe the SOL transfer action")
async def transfer_metadata(request: Request, provider: TransferActionProvider = Depends(get_transfer_provider)):
    try:
        return actions_json_response(provider.get_metadata(str(request.url), request_origin(request)))
    except ActionError:
        raise
    except Exception:
        raise unknown_error(request)


@app.post(TRANSFER_PATH, summary="Build a SOL transfer transaction")
async def transfer_transaction(request: Request, provider: TransferActionProvider = Depends(get_transfer_provider)):
    """Return an unsigned transfer from the caller to the requested destination"""
    try:
        body = await request.json()
        return actions_json_response(await provider.build_transaction(str(request.url), body))
    except ActionError:
        raise
    except Exception:
        raise unknown_error(request)


@app.get("/health", summary="Health check")
async def health_check(config: ActionsConfig = Depends(get_config)):
    """Health check endpoint"""
    return {
        "status": "healthy",
        "timestamp": datetime.now().isoformat(),
        "solana_rpc": config.rpc_url,
    }


if __name__ == "__main__":
    import uvicorn
    port = int(os.environ.get("PORT", 8000))
    uvicorn.run(app, host="0.0.0.0", port=port)
