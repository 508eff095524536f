from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import Annotated

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.concurrency import run_in_threadpool

from . import __version__
from .accounts import AccountTable
from .config import Settings, get_settings
from .errors import AuthenticationError, RelayError
from .ingest import read_event
from .pipeline import Dispatcher
from .signature import SIGNATURE_HEADER, verify_signature
from .textable_client import TextableClient

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: the account table is built here once, so a bad config fails fast
    settings = get_settings()
    if not settings.retell_api_key:
        logger.warning("RETELL_API_KEY not set; webhook signatures are checked against an empty key")
    get_dispatcher()
    yield


app = FastAPI(title="retell-textable", version=__version__, lifespan=lifespan)


# --- Dependencies ---


@lru_cache
def get_dispatcher() -> Dispatcher:
    settings = get_settings()
    return Dispatcher(
        accounts=AccountTable.from_settings(settings),
        client=TextableClient(settings.textable_api_url),
    )


def error_response(exc: RelayError) -> JSONResponse:
    return JSONResponse(exc.to_body(), status_code=exc.status_code)


# --- Routes ---


@app.get("/", response_class=PlainTextResponse)
def root() -> str:
    return "Retell -> Textable middleware OK"


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.post("/retell-function")
async def retell_function(
    request: Request,
    settings: Annotated[Settings, Depends(get_settings)],
    dispatcher: Annotated[Dispatcher, Depends(get_dispatcher)],
) -> JSONResponse:
    """
    Retell custom-function webhook.

    Responses:
      200 {"success": true, "textable": <Textable body>}
      400 {"error": <reason>}
      401 {"error": "Invalid signature"}
      500 {"error": <reason>, "details": <Textable body or message>}
    """
    try:
        event = await read_event(request)

        if not verify_signature(event.raw, request.headers.get(SIGNATURE_HEADER), settings.retell_api_key):
            client_host = request.client.host if request.client else None
            logger.warning("Invalid Retell signature from %s", client_host)
            raise AuthenticationError("Invalid signature")

        # Textable is called with a blocking client; keep it off the event loop
        result = await run_in_threadpool(dispatcher.dispatch, event.payload)
        return JSONResponse(result.body, status_code=result.status_code)
    except RelayError as exc:
        return error_response(exc)
    except Exception as exc:
        logger.exception("Server error")
        return JSONResponse({"error": "Server error", "details": str(exc)}, status_code=500)
