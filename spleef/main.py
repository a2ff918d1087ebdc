from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI
import logging

from spleef.api.routes import router
from spleef.config import host_settings_from_env
from spleef.runtime import get_runtime, init_runtime, start_ticking, stop_ticking

# Pick up SPLEEF_* overrides from a local .env without clobbering the real environment.
load_dotenv(override=False)
settings = host_settings_from_env()

# Configure logging
logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def _lifespan(_: FastAPI) -> AsyncIterator[None]:
    runtime = init_runtime(settings=settings)
    start_ticking(runtime)
    logger.info("Spleef host ticking at %s Hz", settings.tick_rate)
    try:
        yield
    finally:
        await stop_ticking(runtime)


app = FastAPI(title="spleef", version="0.1.0", lifespan=_lifespan)
app.include_router(router)


@app.get("/info")
async def info() -> dict[str, str]:
    return {"name": "spleef", "version": "0.1.0", "plugin": get_runtime().plugin.name}
