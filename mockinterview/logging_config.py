import logging

from .config import get_settings


def setup_logging() -> logging.Logger:
    """Configure the root logger with a single console handler."""
    settings = get_settings()
    logger = logging.getLogger()
    logger.setLevel(settings.log_level)

    # Clear any existing handlers so repeated app creation does not duplicate output
    logger.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(
        logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    )
    console_handler.setLevel(settings.log_level)
    logger.addHandler(console_handler)

    # Set third-party loggers to WARNING to reduce noise
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("openai").setLevel(logging.WARNING)

    return logger
