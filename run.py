"""Entry point for the Crew Roster API server.

Launches the FastAPI application with uvicorn.  Host, port and log
level come from the same environment variables as the application
settings (``HOST``, ``PORT``, ``LOG_LEVEL``); set ``ENVIRONMENT=test``
to expose the ``POST /test/reset`` route.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from crew_roster_api.app.core.config import settings
from crew_roster_api.app.main import app


async def run_api() -> None:
    """Serve the API until interrupted."""
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    logging.getLogger("crew_roster_api.run").info("Server listening on http://%s:%s", settings.host, settings.port)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(run_api())
    except (KeyboardInterrupt, SystemExit):
        pass
