from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import inject
from fastapi import FastAPI

from src.link_checker.domain.repositories import StorageRepository
from src.link_checker.worker.pool import LinkCheckerPool
from src.setup.api_config import get_api_settings
from src.setup.app_config import configure_di
from src.setup.logging_config import configure_logging

settings = get_api_settings()
configure_logging(settings.LOG_LEVEL)
configure_di()


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    pool = inject.instance(LinkCheckerPool)
    pool.start()
    pool.recover_tasks()
    try:
        yield
    finally:
        pool.stop()
        inject.instance(StorageRepository).close()


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Link availability checker with queued background workers",
    lifespan=lifespan,
)

from src.link_checker.presentation.routes import router as api_router  # noqa: E402

app.include_router(api_router, prefix="")
