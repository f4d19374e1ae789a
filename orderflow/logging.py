import contextlib
import sys
import threading
from loguru import logger
from orderflow.config import get_config

_LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)

_lock = threading.Lock()
_sink_id = None


class AppLogger:
    """Global logger configuration for the application.

    The stderr sink is installed once, at the level from get_config().log_level.
    Sinks added elsewhere (tests, embedding applications) are never removed.
    """
    def __init__(self, reconfigure: bool = False, level: str = None) -> None:
        global _sink_id
        with _lock:
            if _sink_id is None or reconfigure:
                # loguru's default stderr handler (id 0) would duplicate ours
                stale = 0 if _sink_id is None else _sink_id
                with contextlib.suppress(ValueError):
                    logger.remove(stale)
                _sink_id = logger.add(
                    sink=lambda msg: print(msg, end="", file=sys.stderr),
                    level=(level or get_config().log_level).upper(),
                    format=_LOG_FORMAT,
                )
        self.logger = logger

    def get_logger(self, name: str = None):
        """Get the configured logger instance.

        Args:
            name (str, optional): Name for the logger context. Defaults to None.
        Returns:
            loguru.Logger: The configured logger instance.
        """
        return self.logger.bind(name=name or "orderflow")


def configure_logging(level: str = None) -> None:
    """Replace the application sink, at `level` or the current config's log level."""
    AppLogger(reconfigure=True, level=level)


def get_logger(name: str = None):
    """Get an application logger, installing the application sink on first use."""
    return AppLogger().get_logger(name)
