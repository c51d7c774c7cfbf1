"""
FastAPI application

Router registration and app setup.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core.logging import setup_logging
from web.dependencies import get_app_settings, get_sales_backend, set_sales_backend

# Console + file logging
_log_level = logging.getLevelName(get_app_settings().log_level)
setup_logging("web", console_level=_log_level, file_level=_log_level)

from adapters.backend.client import BillingBackendClient
from web.routes import billing, bullion, gst, health, ledger, payroll

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """App lifecycle

    Connects the billing backend client when settings name a backend
    and none was installed beforehand.
    """
    settings = get_app_settings()
    client = None

    if get_sales_backend() is None:
        if settings.backend.base_url:
            client = BillingBackendClient(
                base_url=settings.backend.base_url,
                api_token=settings.backend.api_token,
                timeout=settings.backend.timeout,
            )
            set_sales_backend(client)
            logger.info(f"Web: billing backend at {settings.backend.base_url}")
        else:
            logger.info("Web: no billing backend configured, preview endpoints only")

    yield

    if client is not None:
        await client.close()
        set_sales_backend(None)
        logger.info("Web: billing backend client closed")


def create_app() -> FastAPI:
    """Build the FastAPI app with every router registered"""
    application = FastAPI(
        title="Silver Ledger API",
        description="Silver / labor billing and ledger calculator",
        version=health.API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # CORS (development)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    application.include_router(health.router)
    application.include_router(billing.router)
    application.include_router(gst.router)
    application.include_router(ledger.router)
    application.include_router(bullion.router)
    application.include_router(payroll.router)

    return application


app = create_app()
