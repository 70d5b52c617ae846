"""
FastAPI HTTP Transport for the Request Gateway

Endpoints:
- /health - Liveness probe
- /api/messages - Inbound UI messages ({"type": "translate-query", "query": ...})

Every translate request gets exactly one JSON answer, HTTP 200 for both
translated queries and error results.

NOTE: Do NOT add `from __future__ import annotations` to this file.
PEP 563 breaks FastAPI's runtime introspection for parameter sources.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

import uvicorn
from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from src import __version__
from src.common.telemetry import is_telemetry_enabled
from src.nl2scry.config import NL2ScryConfig
from src.nl2scry.gateway.gateway import TRANSLATE_MESSAGE_TYPE, RequestGateway

logger = logging.getLogger(__name__)


class InboundMessage(BaseModel):
    """
    Message sent by the UI process.

    A missing type reads as an unsupported message. The query is checked by
    the gateway, which answers with an error result instead of a 422.
    """

    type: str = ""
    query: Any = ""


def create_app(
    config: NL2ScryConfig | None = None,
    gateway: RequestGateway | None = None,
) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        config: Service configuration
        gateway: Pre-built gateway (tests); built from config otherwise

    Returns:
        FastAPI application instance
    """
    config = config or NL2ScryConfig()
    gateway = gateway or RequestGateway.from_config(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        telemetry = "on" if is_telemetry_enabled() else "off"
        logger.info(f"Starting nl2scry gateway (telemetry {telemetry})")
        yield
        logger.info("Shutting down nl2scry gateway")
        close = getattr(gateway.engine.resolver, "close", None)
        if close is not None:
            await close()

    app = FastAPI(
        title="NL2Scry Gateway",
        description="Translates natural language card searches into Scryfall queries",
        version=__version__,
        lifespan=lifespan,
    )

    @app.get("/health")
    async def liveness_check() -> JSONResponse:
        """Liveness probe - just checks if process is alive."""
        return JSONResponse(content={"status": "alive"}, status_code=200)

    @app.post("/api/messages")
    async def handle_message_endpoint(body: InboundMessage) -> dict[str, Any]:
        """Answer one UI message."""
        response = await gateway.handle_message(body.model_dump())
        if response is None:
            raise HTTPException(
                status_code=400,
                detail=f"Unsupported message type {body.type!r}; expected {TRANSLATE_MESSAGE_TYPE!r}",
            )
        return response

    return app


async def run_http_server(config: NL2ScryConfig | None = None) -> None:
    """
    Run the HTTP server.

    Args:
        config: Service configuration
    """
    config = config or NL2ScryConfig()
    app = create_app(config)

    logger.info(f"Starting HTTP server on {config.host}:{config.port}")

    server_config = uvicorn.Config(
        app,
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
    )
    server = uvicorn.Server(server_config)
    await server.serve()
