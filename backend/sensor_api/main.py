"""Command-line entry point: python -m sensor_api.main"""

import asyncio
import logging

from sensor_api.config import get_settings
from sensor_api.server import Server


def main() -> None:
    settings = get_settings()
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    server = Server(settings)
    # uvicorn handles SIGINT/SIGTERM and drains connections before returning.
    asyncio.run(server.listen_and_serve())


if __name__ == "__main__":
    main()
