import os
import logging
from logging.handlers import TimedRotatingFileHandler

ROOT_LOGGER = "momentum"

_FORMAT = logging.Formatter(
    "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s",
    "%Y-%m-%d %H:%M:%S"
)


def _configure_root() -> logging.Logger:
    root = logging.getLogger(ROOT_LOGGER)
    if root.handlers:
        return root

    root.setLevel(os.getenv("LOG_LEVEL", "DEBUG").upper())
    root.propagate = False

    console = logging.StreamHandler()
    console.setFormatter(_FORMAT)
    root.addHandler(console)

    # One file for the whole app, rotated at midnight UTC, 7 days kept
    log_dir = os.getenv("LOG_DIR", "logs")
    os.makedirs(log_dir, exist_ok=True)
    file_handler = TimedRotatingFileHandler(
        filename=os.path.join(log_dir, f"{ROOT_LOGGER}.log"),
        when="midnight",
        interval=1,
        backupCount=7,
        encoding="utf-8",
        utc=True
    )
    file_handler.suffix = "%Y-%m-%d"
    file_handler.setFormatter(_FORMAT)
    root.addHandler(file_handler)
    return root


def get_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    """Child of the shared ``momentum`` logger, e.g. ``momentum.task_controller``."""
    root = _configure_root()
    if name == ROOT_LOGGER:
        return root
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")
