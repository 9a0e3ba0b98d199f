import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

import httpx
import uvicorn
from fastapi import APIRouter, FastAPI, Request
from fastapi.responses import JSONResponse

from config import Settings, get_settings
from origin_gate import setup_cors, setup_origin_gate
from request_forward import ForwardError, forward, quote_query

SERVICE_NAME = "Summit Cards Pokemon TCG API Proxy"
VERSION = "1.1.0"

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/")
def home():
    return {
        "status": "ok",
        "service": SERVICE_NAME,
        "version": VERSION,
        "endpoints": {
            "sets": "/api/sets",
            "cards": "/api/cards",
            "setById": "/api/sets/:id",
            "cardById": "/api/cards/:id",
        },
    }


@router.get("/health")
def health():
    return {"status": "healthy", "timestamp": datetime.now(timezone.utc).isoformat()}


async def proxy(request: Request, path: str, what: str, query_string: str = ""):
    try:
        return await forward(
            path,
            query_string,
            settings=request.app.state.settings,
            transport=request.app.state.transport,
        )
    except ForwardError as error:
        logger.error(f"Error fetching {what}: {error.message}")
        return JSONResponse(
            status_code=500,
            content={"error": f"Failed to fetch {what}", "message": error.message},
        )


def raw_query(request: Request) -> str:
    # Forwarded byte-for-byte, so skip Starlette's parsed query params.
    return quote_query(request.scope["query_string"])


@router.get("/api/sets")
async def get_sets(request: Request):
    return await proxy(request, "/sets", "sets", raw_query(request))


@router.get("/api/sets/{set_id}")
async def get_set(request: Request, set_id: str):
    return await proxy(request, f"/sets/{set_id}", "set")


@router.get("/api/cards")
async def get_cards(request: Request):
    return await proxy(request, "/cards", "cards", raw_query(request))


@router.get("/api/cards/{card_id}")
async def get_card(request: Request, card_id: str):
    return await proxy(request, f"/cards/{card_id}", "card")


def create_app(
    settings: Optional[Settings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Summit Cards Backend v{VERSION} running on port {settings.port}")
        logger.info(
            "API Key configured: "
            + ("Yes" if settings.api_key_configured else "No (using default rate limits)")
        )
        yield

    app = FastAPI(
        title=SERVICE_NAME,
        version=VERSION,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.transport = transport
    setup_origin_gate(app)
    setup_cors(app, settings.allowed_origins)
    app.include_router(router)
    return app


app = create_app()


def run():
    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper())
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
