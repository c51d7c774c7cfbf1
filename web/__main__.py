"""
Web entry point

Run:
    python -m web
"""

import uvicorn

from web.dependencies import get_app_settings

if __name__ == "__main__":
    settings = get_app_settings()
    uvicorn.run(
        "web.app:app",
        host=settings.web_host,
        port=settings.web_port,
        reload=False,
    )
