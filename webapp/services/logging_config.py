"""Log handlers for the web API."""

import logging
from logging.handlers import RotatingFileHandler

from flask import Flask

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _has_file_handler(logger: logging.Logger) -> bool:
    return any(isinstance(h, RotatingFileHandler) for h in logger.handlers)


def configure_logging(app: Flask) -> None:
    """
    Send request and editing logs to ``LOG_DIR/api.log`` and the console.

    The file rotates at 1 MB with three backups and records everything from
    DEBUG up; the console shows ``LOG_LEVEL`` and above. The same handlers
    are installed on the root logger so that ``nhxedit`` module loggers end up
    next to the request log. Calling this again for a second app reuses the
    handlers already in place.
    """
    log_dir = app.config["LOG_DIR"]
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "api.log"

    file_handler = RotatingFileHandler(
        log_file, maxBytes=1_000_000, backupCount=3, encoding="utf-8"
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT, "%Y-%m-%d %H:%M:%S"))

    console_handler = logging.StreamHandler()
    console_handler.setLevel(app.config.get("LOG_LEVEL", "INFO"))
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT, "%H:%M:%S"))

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    if not _has_file_handler(root_logger):
        root_logger.handlers = [file_handler, console_handler]

    if not _has_file_handler(app.logger):
        app.logger.handlers = [file_handler, console_handler]
    app.logger.setLevel(logging.DEBUG)
    app.logger.propagate = False

    logging.getLogger("nhxedit").setLevel(logging.DEBUG)
    app.logger.info("Logging to %s", log_file)
