# refer - https://loguru.readthedocs.io/en/stable/api/logger.html
import sys
from pathlib import Path
from typing import Optional

from loguru import logger

STDERR_FORMAT = "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{extra[name]}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"

logger.remove() # remove default stuff

_stderr_handler_id = logger.add(sys.stderr, format=STDERR_FORMAT, level="INFO", colorize=True)

logger.configure(extra={"name": "paperscrape"})

log_dir = Path("logs")
log_dir.mkdir(exist_ok=True)


# failed scrapes end up here, one file per day
logger.add(
    log_dir / "errors_{time:YYYY-MM-DD}.log",
    format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[name]}:{function}:{line} - {message}",
    level="ERROR",
    rotation="5 MB",
    retention="90 days",
)

# Function to get logger with context
def get_logger(name: Optional[str] = None):
    if name:
        return logger.bind(name=name)
    return logger


def set_log_level(level: str):
    """Swap the stderr sink for one at `level`; the error file sink is untouched."""
    global _stderr_handler_id
    logger.remove(_stderr_handler_id)
    _stderr_handler_id = logger.add(sys.stderr, format=STDERR_FORMAT, level=level.upper(), colorize=True)
