import logging
import logging.handlers
from pathlib import Path
from typing import Optional

NOISY_LOGGERS = ["spotipy", "urllib3.connectionpool"]

LOG_FORMAT = "[%(asctime)s] %(levelname)s [%(name)s-%(funcName)s:%(lineno)d] %(message)s"


class WarningAndAboveNoisyFilter(logging.Filter):
    def filter(self, record):
        if not any(logger in record.name for logger in NOISY_LOGGERS): return True
        return record.levelno >= logging.WARNING


def setup_logging(log_path: Optional[str] = None, level=logging.INFO) -> None:
    """
    Configure the root logger. Call this ONCE from main().

    Logs only go to a file: the viewer owns the whole terminal, so anything
    written to stderr would land on top of the UI.
    """
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    if log_path is None:
        root_logger.addHandler(logging.NullHandler())
        return

    Path(log_path).parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.handlers.RotatingFileHandler(
        log_path, maxBytes=10*1024*1024, backupCount=5, encoding="utf-8"
    )
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt='%H:%M:%S'))
    file_handler.addFilter(WarningAndAboveNoisyFilter())

    root_logger.setLevel(level)
    root_logger.addHandler(file_handler)

    logging.info(f"Logging initialized (level: {logging.getLevelName(level).lower()})")
