"""Agent Router HTTP Gateway

FastAPI application exposing the configured routing strategy. Callers post
an utterance and receive the agent (and its address) to forward it to.

Run:
    uvicorn agent_router.main:app --reload
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse
from loguru import logger

from .api.routers import health_router, routing_router
from .config import settings
from .log import setup_logging


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan - logging setup on startup"""
    setup_logging(settings.log_level)
    logger.info("Starting {} v{} (strategy={})", settings.app_name, settings.app_version, settings.router_strategy)
    yield
    logger.info("Shutting down...")


app = FastAPI(
    title=settings.app_name,
    description=settings.app_description,
    version=settings.app_version,
    debug=settings.environment == "development",
    lifespan=lifespan,
)

if settings.cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins.split(","),
        allow_credentials=settings.cors_credentials,
        allow_methods=settings.cors_methods.split(","),
        allow_headers=settings.cors_headers.split(","),
    )

app.include_router(health_router)
app.include_router(routing_router)


@app.get("/", include_in_schema=False)
async def root() -> RedirectResponse:
    """Redirect root to API docs"""
    return RedirectResponse(url="/docs")
