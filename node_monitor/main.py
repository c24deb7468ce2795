import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from . import __version__
from .api import state
from .dependencies import get_local_monitor, get_refresh_loop, get_settings
from .logging_config import setup_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    settings = get_settings()
    setup_logging(settings)

    config_info = settings.config_file_info
    logging.info(f"Configuration loaded from: {config_info['active_config_file']}")
    logging.info(f"Running on hostname: {config_info['hostname']}")

    local_monitor = get_local_monitor()
    logging.info(f"Node monitor starting up, watching: {', '.join(local_monitor.watched_paths)}")

    refresh_loop = get_refresh_loop()
    await refresh_loop.start()

    yield

    logging.info("Node monitor shutting down...")
    await refresh_loop.stop()


app = FastAPI(
    title="Node Monitor",
    description="Local storage capacity monitor and free space alerting",
    version=__version__,
    lifespan=lifespan,
)

app.include_router(state.router)


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "node-monitor"}


def run() -> None:
    settings = get_settings()
    uvicorn.run(
        "node_monitor.main:app",
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
