"""Main entry point for the spelling app."""
import logging
import sys

from spellcat import __version__
from spellcat.app import create_app
from spellcat.config import ensure_directories, settings
from spellcat.logging_config import setup_logging

logger = logging.getLogger("spellcat")


def main() -> int:
    """Run the web server."""
    ensure_directories()
    setup_logging(f"Starting SpellCat v{__version__} ...")

    try:
        app = create_app()
    except Exception:
        logger.exception("Failed to start the application")
        return 1

    logger.info("Serving on http://%s:%d", settings.server.host, settings.server.port)
    try:
        app.run(
            host=settings.server.host,
            port=settings.server.port,
            debug=settings.server.debug,
        )
    except KeyboardInterrupt:
        logger.info("Received keyboard interrupt, shutting down...")
    return 0


if __name__ == "__main__":
    sys.exit(main())
