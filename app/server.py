"""
Run the API under uvicorn.
"""

import uvicorn

from app.core.config import settings


def run() -> None:
    """Serve the application on HOST:PORT until the process is stopped."""
    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_config=None,
        access_log=False,
    )
