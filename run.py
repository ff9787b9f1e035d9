"""Entry point for the Travel List API.

Serves the FastAPI application with Uvicorn.  Host and port are read
from the ``HOST`` and ``PORT`` environment variables, database
settings from ``DATABASE_URI``, ``DATABASE_NAME`` and
``TRAVEL_COLLECTION`` (see ``travel_list_api.app.core.config``).

Usage:
    python run.py
"""
import asyncio

from uvicorn import Config, Server

from travel_list_api.app.core.config import settings
from travel_list_api.app.main import app


async def main() -> None:
    """Start the API server and run until interrupted."""
    config = Config(app=app, host=settings.host, port=settings.port, reload=False, log_level="info")
    server = Server(config)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
