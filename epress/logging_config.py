import logging
import sys
from epress.config import CONFIG

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _level_from_config() -> int:
    return getattr(logging, CONFIG.LOG_LEVEL.upper(), logging.INFO)


def configure_logger(name: str = "epress") -> logging.Logger:
    """
    Set the level on an `epress` logger and give it a stderr handler.

    stdout is left to command output such as `epress headlines --json`.
    Calling this again for the same name reuses the existing handler.
    """
    logger = logging.getLogger(name)
    level = _level_from_config()
    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    return logger


def create_logger(module_name: str) -> logging.Logger:
    logger = configure_logger(f"epress.{module_name}")
    # has its own handler; the root "epress" logger would print each record twice
    logger.propagate = False
    return logger


logger = configure_logger()

__all__ = ["LOG_FORMAT", "logger", "configure_logger", "create_logger"]
