"""Entry point for serving the BRF Ellagården API.

Starts the FastAPI application with Uvicorn.  It is intended to be
executed from the project root, for example in a container where you
only specify a single Python file to run.

Host and port come from the ``HOST`` and ``PORT`` environment
variables (defaults ``0.0.0.0`` and ``5000``); the admin password comes
from ``AUTH_SECRET``.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from ellagarden_api.app.core.config import settings
from ellagarden_api.app.main import app


async def main() -> None:
    """Serve the API until interrupted."""
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        logging.getLogger(__name__).info("Shutting down")
