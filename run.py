"""Entry point for serving the Book Library API.

Host and port are read from the ``API_HOST`` and ``API_PORT``
environment variables (defaults ``0.0.0.0`` and ``8000``); see
``book_library_api.app.core.config`` for the remaining settings.

Usage:
    python run.py
"""
import asyncio

from uvicorn import Config, Server

from book_library_api.app.core.config import settings
from book_library_api.app.main import app


async def main() -> None:
    """Serve the API with Uvicorn until interrupted."""
    config = Config(
        app=app,
        host=settings.api_host,
        port=settings.api_port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
