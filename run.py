"""Entry point for serving the Mindfull API.

Host and port come from ``HOST`` and ``PORT`` (defaults ``0.0.0.0``
and ``8000``); see ``mindfull_api.app.core.config`` for the remaining
variables (``API_TOKEN``, ``DATABASE_URL``, ``LOG_LEVEL``...).

Usage:
    python run.py
"""
import asyncio

from uvicorn import Config, Server

from mindfull_api.app.core.config import settings
from mindfull_api.app.main import app


async def main() -> None:
    """Start the API using Uvicorn."""
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        # Keep the root logging set up by create_app.
        log_config=None,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
