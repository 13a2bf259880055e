import logging
import os

from config import LOG_PATH

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def _file_handler(filename: str, level: int, log_path: str) -> logging.FileHandler:
    handler = logging.FileHandler(os.path.join(log_path, filename), encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    return handler


def _clear_handlers(logger: logging.Logger):
    """Detach every handler, closing the log files opened by a previous setup."""
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        if isinstance(handler, logging.FileHandler):
            handler.close()


def setup_logging(log_path: str = LOG_PATH):
    """Sets up the logging configuration for the application."""

    # Create logs directory if it doesn't exist
    os.makedirs(log_path, exist_ok=True)

    # Clear all existing handlers to prevent duplication
    root_logger = logging.getLogger()
    _clear_handlers(root_logger)
    root_logger.setLevel(logging.DEBUG)

    # Create a console handler for user-facing output
    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.WARNING)  # Only show WARNING and above on the console
    console_handler.setFormatter(logging.Formatter('%(message)s'))
    root_logger.addHandler(console_handler)

    # App log will be for unexpected errors and misc logs not caught by specific loggers
    app_logger = logging.getLogger('app')
    app_logger.setLevel(logging.INFO)
    _clear_handlers(app_logger)
    app_logger.addHandler(_file_handler("app.log", logging.INFO, log_path))
    app_logger.propagate = False

    # Search core: one DEBUG line per search call
    kmp_logger = logging.getLogger("kmp")
    kmp_logger.setLevel(logging.DEBUG)
    _clear_handlers(kmp_logger)
    kmp_logger.addHandler(_file_handler("kmp.log", logging.DEBUG, log_path))
    kmp_logger.propagate = False

    benchmark_logger = logging.getLogger("benchmark")
    benchmark_logger.setLevel(logging.INFO)
    _clear_handlers(benchmark_logger)
    benchmark_logger.addHandler(_file_handler("benchmark.log", logging.INFO, log_path))
    benchmark_logger.propagate = False
