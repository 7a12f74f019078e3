"""Entry point for the Idea Board API server.

Starts the FastAPI application with Uvicorn.  Host, port, store and
database connection are read from environment variables (see
``idea_board_api.app.core.config``).

Usage:
    python run.py
    IDEA_STORE=postgres DB_HOST=db PORT=8080 python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from idea_board_api.app.core.config import settings
from idea_board_api.app.main import app


async def run_api() -> None:
    """Serve the API until interrupted."""
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
        # Logging is configured by create_app; uvicorn logs through it.
        log_config=None,
    )
    server = Server(config)
    logging.getLogger(__name__).info("Server is starting on port %s", settings.port)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(run_api())
    except (KeyboardInterrupt, SystemExit):
        pass
