import logging
import sys

import uvicorn

from urlshortener.config import load_settings
from urlshortener.exceptions import ConfigurationError, StoreUnavailableError
from urlshortener.logging_config import setup_logging
from urlshortener.main import create_app

logger = logging.getLogger("urlshortener")


def run() -> None:
    try:
        settings = load_settings()
    except ConfigurationError as exc:
        sys.exit(f"Error loading config: {exc}")

    setup_logging(settings.environment)
    logger.info("Starting url-shortener", extra={"env": settings.environment})

    try:
        app = create_app(settings)
    except StoreUnavailableError:
        logger.exception("Failed to initialize storage")
        sys.exit(1)

    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        timeout_keep_alive=settings.http_idle_timeout,
        log_config=None,  # keep the handlers installed by setup_logging
    )


if __name__ == "__main__":
    run()
