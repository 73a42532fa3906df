import os
import sys
from pathlib import Path

from loguru import logger

log_dir = Path(os.getenv("LOG_DIR", "logs"))
log_file = log_dir / "discovery_{time}.log"

logger.remove()
logger.add(
    sys.stderr,
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
)
logger.add(
    log_file,
    rotation="64 MB",
    retention="10 days",
    compression="zip",
    encoding="utf-8",
    level="DEBUG",
)
