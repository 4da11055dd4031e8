# ============================
# 📜 Logging Setup
# ============================
import sys
from pathlib import Path

from loguru import logger

from config import LOG_FILE_NAME

STDOUT_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {extra[mothership]} | {message}"
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | thread={thread.id} | {extra[mothership]} | {message}"


def setup_logging(log_dir: Path, level: str = "INFO") -> Path:
    """
    📜 Send logs to stdout and to a file that rolls over at midnight.

    Args:
        log_dir (Path): Folder for the log files.
        level (str): Minimum level for both sinks.

    Returns:
        Path: The active log file.
    """
    logger.remove()
    # outside a mothership context the id column shows "-"
    logger.configure(extra={"mothership": "-"})
    logger.add(sys.stdout, level=level.upper(), format=STDOUT_FORMAT)

    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME
    logger.add(
        log_file,
        level=level.upper(),
        format=FILE_FORMAT,
        rotation="00:00",
        colorize=False,
        enqueue=True,
    )
    return log_file
