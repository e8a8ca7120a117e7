"""social-api-wd — the example route served through the Server wrapper, no database."""

import logging
import sys

from social.api.routes import example
from social.api.server import Server
from social.config import resolve_settings
from social.core.errors import ConfigurationError
from social.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    setup_logging()
    try:
        settings = resolve_settings()
    except ConfigurationError as e:
        logger.critical(e.message, extra={"error_code": e.code})
        sys.exit(1)
    setup_logging(settings.log_level, settings.log_format)

    srv = Server(
        settings.service_name, host=settings.server_host, port=settings.server_port,
    )
    srv.register_route(example.route())
    srv.start()


if __name__ == "__main__":
    main()
