"""FastAPI application for the attribute minifier.

Exports ``app`` for use with ``uvicorn main:app``.
"""

import logging
import os
import traceback
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

# Load .env next to this file so MINIFIER_* settings are picked up
load_dotenv(Path(__file__).resolve().parent / ".env")

from minifier.config import load_config
from minifier.engine import minify_sources
from minifier.errors import ConfigError
from minifier.log import configure_logging
from models.request import MinifyRequest
from models.response import MinifyResponse

logger = logging.getLogger("minifier")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Install structured logging when the server starts."""
    configure_logging(os.getenv("MINIFIER_LOG_LEVEL", "INFO").upper())
    yield


# ---------------------------------------------------------------------------
# FastAPI application
# ---------------------------------------------------------------------------

app = FastAPI(title="Attribute Minifier", lifespan=lifespan)


# ---------------------------------------------------------------------------
# Exception handlers
# ---------------------------------------------------------------------------

@app.exception_handler(ConfigError)
async def config_error_handler(request: Request, exc: ConfigError) -> JSONResponse:
    """Reject invalid per-request settings with a 422."""
    return JSONResponse(status_code=422, content={"detail": str(exc)})


@app.exception_handler(Exception)
async def catch_all_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log unhandled exceptions and return a JSON 500."""
    logger.error(
        "Unhandled exception: %s: %s\n%s",
        type(exc).__name__,
        exc,
        traceback.format_exc(),
    )
    return JSONResponse(
        status_code=500,
        content={"detail": f"{type(exc).__name__}: {exc}"},
    )


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@app.get("/health")
async def health() -> dict:
    """Health check."""
    return {"status": "healthy"}


@app.post("/minify", response_model=MinifyResponse)
def minify(request: MinifyRequest) -> MinifyResponse:
    """Minify an uploaded corpus in memory.

    Runs both passes over ``request.files`` and returns the rewritten
    texts along with the alias map that produced them.
    """
    config = load_config(attributes=request.attributes)
    logger.info("minify request: %d files", len(request.files))

    result = minify_sources(request.files, config)

    logger.info(
        "minify response: %d aliases",
        sum(len(v) for v in result.alias_map.values()),
    )
    return MinifyResponse(
        files=result.outputs,
        alias_map=result.alias_map,
        skipped=result.skipped,
    )
