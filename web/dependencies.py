"""
Dependency injection

Dependencies wired through FastAPI's Depends.
"""

import logging

from fastapi import HTTPException

from adapters.interfaces import ISalesBackend
from core.config.loader import Settings, SettingsLoadError, default_settings, get_settings

logger = logging.getLogger(__name__)


def get_app_settings() -> Settings:
    """Application settings

    Falls back to the built-in defaults when settings.yaml is missing,
    so previews work without any configuration.
    """
    try:
        return get_settings().settings
    except SettingsLoadError as e:
        logger.warning(f"Using default settings: {e}")
        return default_settings()


# =========================================================================
# Billing backend
# =========================================================================

# Set during app startup (or by tests)
_sales_backend: ISalesBackend | None = None


def set_sales_backend(backend: ISalesBackend | None) -> None:
    """Install the billing backend used by the routes

    Args:
        backend: ISalesBackend implementation, None to unset
    """
    global _sales_backend
    _sales_backend = backend


def get_sales_backend() -> ISalesBackend | None:
    """Installed billing backend, or None"""
    return _sales_backend


def is_backend_available() -> bool:
    return _sales_backend is not None


def require_sales_backend() -> ISalesBackend:
    """Billing backend for routes that need one

    Raises:
        HTTPException: 503 when no backend is configured
    """
    if _sales_backend is None:
        raise HTTPException(status_code=503, detail="Billing backend is not configured")
    return _sales_backend
