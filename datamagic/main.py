import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from datamagic.config import get_cached_settings
from datamagic.routers import ping, search
from datamagic.services.factory import make_data_magic

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting data-magic API...")

    settings = get_cached_settings()
    app.state.settings = settings

    data_magic = make_data_magic(settings)
    app.state.data_magic = data_magic

    if data_magic.search_client.health_check():
        logger.info("OpenSearch connected successfully")
        if settings.reindex_on_startup:
            app.state.reindex = data_magic.reindex_if_needed()
        else:
            data_magic.config_store.load_if_needed()
    else:
        logger.warning("OpenSearch connection failed")

    logger.info("API ready")
    yield

    data_magic.close()
    logger.info("API shutdown complete")


app = FastAPI(
    title="Data Magic API",
    description="Search service over environment-scoped OpenSearch indices",
    version=get_cached_settings().app_version,
    lifespan=lifespan,
)

# ping must be registered before the catch-all endpoint route
app.include_router(ping.router, prefix="/v1")
app.include_router(search.router, prefix="/v1")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, port=8000, host="0.0.0.0")
