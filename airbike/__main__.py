"""Allow running the timer as a module: python -m airbike."""

import logging
import os
import sys

from PyQt6.QtWidgets import QApplication

from .app import AirbikeApp

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    """Root logger from ``LOG_LEVEL`` (default INFO)."""
    name = os.environ.get("LOG_LEVEL", "INFO").upper()
    level = logging.getLevelName(name)
    invalid = not isinstance(level, int)
    logging.basicConfig(
        level=logging.INFO if invalid else level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if invalid:
        logger.warning("Invalid LOG_LEVEL %r, defaulting to INFO", name)


def main() -> None:
    configure_logging()

    app = QApplication(sys.argv)
    app.setApplicationName("AirbikeTimer")
    app.setOrganizationName("AirbikeTimer")

    window = AirbikeApp()
    window.show()
    logger.info("Airbike Timer ready")

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
