import logging
import logging.handlers
import os

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(app_env: str, log_file: str = None):
    """Configure logging based on environment."""

    formatter = logging.Formatter(LOG_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if app_env == "development" else logging.INFO)

    # Remove existing handlers (important if reloading in dev)
    for h in list(root_logger.handlers):
        root_logger.removeHandler(h)

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)

        # Rotating file handler: 10MB per file, keep 5 backups
        file_handler = logging.handlers.RotatingFileHandler(
            log_file, maxBytes=10*1024*1024, backupCount=5
        )
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    if app_env != "development":
        # Keep console logs at WARNING+ in prod
        console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

