"""FastAPI application - routes, error handlers and the startup/shutdown lifespan."""

import asyncio
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import PlainTextResponse
from loguru import logger

from app.container import container
from app.services.monitoring import run_probes
from settings import LEADERBOARD_INDEX_PATH, LOG_LEVEL, LOG_TO_FILE, VERSION
from settings.logging import setup_logging
from web.api.cards import router as cards_router
from web.api.errors import install_error_handlers
from web.api.guilds import router as guilds_router
from web.api.leaderboards import router as leaderboards_router
from web.api.players import router as players_router
from web.api.skyblock import router as skyblock_router


async def warm_up() -> None:
    """Probe upstreams and load game resources without holding up startup."""
    await run_probes(container.hypixel, container.mojang, container.monitor)
    errors = await container.resources.load_all()
    for e in errors:
        container.monitor.alert_exception(e, "Failed to load game resources")
    if not errors:
        container.monitor.ok("All game resources loaded")


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(LOG_LEVEL, LOG_TO_FILE)
    logger.info("Starting Nadeshiko {}", VERSION)
    container.init()

    warm_up_task = asyncio.create_task(warm_up(), name="warm-up")
    container.leaderboards.write_index(LEADERBOARD_INDEX_PATH)
    container.scheduler.start()
    container.monitor.log("Nadeshiko {} started", VERSION)

    try:
        yield
    finally:
        warm_up_task.cancel()
        await asyncio.gather(warm_up_task, return_exceptions=True)
        await container.scheduler.stop()
        uptime = container.uptime
        await container.close()
        logger.info("Shut down after {:.0f}s", uptime)


def create_app() -> FastAPI:
    app = FastAPI(title="Nadeshiko", version=VERSION, lifespan=lifespan)
    install_error_handlers(app)

    @app.get("/", response_class=PlainTextResponse)
    async def root() -> str:
        return f"Nadeshiko version {VERSION}"

    app.include_router(players_router)
    app.include_router(guilds_router)
    app.include_router(leaderboards_router)
    app.include_router(skyblock_router)
    app.include_router(cards_router)
    return app


app = create_app()
