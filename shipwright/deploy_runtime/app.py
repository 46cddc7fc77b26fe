from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.routing import APIRouter
from loguru import logger

from shipwright.deploy_runtime.log import setup_logging
from shipwright.deploy_runtime.settings import get_settings


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    settings = get_settings()
    setup_logging(settings.log_level)

    logger.info("Deploy runtime starting (host={}, port={})", settings.host, settings.port)
    logger.info("Site root: {} (scripts={})", settings.root_path, settings.script_path or "<unset>")
    if not settings.script_path:
        logger.warning("SHIPWRIGHT_SCRIPT_PATH not set -- deployment commands cannot be built")

    yield

    logger.info("Deploy runtime shutting down")


app = FastAPI(title="Shipwright Deploy Runtime", lifespan=lifespan)

# ---------------------------------------------------------------------------
# API router -- all backend endpoints live under /api
# ---------------------------------------------------------------------------
api = APIRouter(prefix="/api")


@api.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


from shipwright.deploy_runtime.routers.hooks import router as hooks_router  # noqa: E402

api.include_router(hooks_router)

app.include_router(api)
