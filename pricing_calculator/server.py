"""
Server entry point.

Run with ``python -m pricing_calculator.server``. uvicorn handles SIGINT and
SIGTERM and drains in-flight requests before exiting.
"""
import logging

import uvicorn

from pricing_calculator.core.config import config
from pricing_calculator.main import create_app


GRACEFUL_SHUTDOWN_SECONDS = 30


def main() -> None:
    logging.basicConfig(
        level=logging.DEBUG if config.is_development() else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = create_app(config)

    logging.getLogger(__name__).info(
        "Starting server in %s mode on %s:%d", config.APP_ENV, config.SERVER_HOST, config.SERVER_PORT
    )
    uvicorn.run(
        app,
        host=config.SERVER_HOST,
        port=config.SERVER_PORT,
        timeout_graceful_shutdown=GRACEFUL_SHUTDOWN_SECONDS,
    )


if __name__ == "__main__":
    main()
