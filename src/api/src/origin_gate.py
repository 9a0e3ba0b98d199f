import logging
from typing import Iterable, Optional

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


def is_origin_allowed(origin: Optional[str], allowed_origins: Iterable[str]) -> bool:
    # Same-origin and non-browser callers send no Origin header.
    if not origin:
        return True
    return origin in allowed_origins


async def enforce_origin(request: Request, call_next):
    origin = request.headers.get("origin")
    if not is_origin_allowed(origin, request.app.state.settings.allowed_origins):
        logger.warning(f"Blocked origin: {origin}")
        return JSONResponse(
            status_code=status.HTTP_403_FORBIDDEN,
            content={"detail": "Not allowed by CORS"},
        )
    return await call_next(request)


def setup_origin_gate(app: FastAPI) -> None:
    # Runs for every path, including ones no route matches.
    app.middleware("http")(enforce_origin)


def setup_cors(app: FastAPI, allowed_origins: Iterable[str]) -> None:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(allowed_origins),
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )
