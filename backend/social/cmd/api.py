"""social-api — full service: example, health and user routes backed by the database."""

import logging
import sys

import uvicorn

from social.config import resolve_settings
from social.core.errors import ConfigurationError
from social.infrastructure.observability import setup_logging
from social.main import create_app

logger = logging.getLogger(__name__)


def main() -> None:
    setup_logging()
    try:
        settings = resolve_settings()
    except ConfigurationError as e:
        logger.critical(e.message, extra={"error_code": e.code})
        sys.exit(1)
    setup_logging(settings.log_level, settings.log_format)

    app = create_app(settings)
    uvicorn.run(
        app, host=settings.server_host, port=settings.server_port, log_config=None,
    )


if __name__ == "__main__":
    main()
