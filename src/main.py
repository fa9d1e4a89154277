"""
Production FastAPI Application

Run with: granian --interface asgi src.main:app
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from src.platform.app_factory import create_app
from src.platform.config.di import cleanup, container, setup
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.logging.loguru_io import Logger


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifespan: startup and shutdown."""
    Logger.base.info('🚀 [Admission Service] Starting up...')

    # Fail fast on a broken credential secret or settings file
    setup()

    container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [Admission Service] Dependency injection wired')

    container.database()
    Logger.base.info('🗄️  [Admission Service] Database engine ready')

    Logger.base.info('✅ [Admission Service] Ready to serve requests')

    yield

    Logger.base.info('🛑 [Admission Service] Shutting down...')

    try:
        await container.database().dispose()
        Logger.base.info('🗄️  [Admission Service] Database engine disposed')
    except Exception as e:
        Logger.base.error(f'❌ [Admission Service] Failed to dispose database engine: {e}')

    container.unwire()
    cleanup()

    Logger.base.info('👋 [Admission Service] Shutdown complete')


app = create_app(lifespan=lifespan)


@app.get('/')
async def root() -> RedirectResponse:
    """Root endpoint - redirect to docs."""
    return RedirectResponse(url='/docs')
