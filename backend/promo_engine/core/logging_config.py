import logging
import sys
from pathlib import Path
from logging.handlers import RotatingFileHandler
from promo_engine.core.config import settings

LOG_DIR = Path(settings.LOG_DIR)

logger = logging.getLogger("promo_engine")
logger.setLevel(logging.DEBUG if settings.DEBUG else logging.INFO)
logger.handlers.clear()

_formatter = logging.Formatter(
    '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)

# Console
console_handler = logging.StreamHandler(sys.stdout)
console_handler.setLevel(logging.DEBUG if settings.DEBUG else logging.INFO)
console_handler.setFormatter(_formatter)
logger.addHandler(console_handler)

# File; skipped when the log directory is not writable (read-only installs)
try:
    LOG_DIR.mkdir(parents=True, exist_ok=True)
    file_handler = RotatingFileHandler(
        LOG_DIR / "engine.log",
        maxBytes=2 * 1024 * 1024,
        backupCount=3,
        encoding="utf-8",
    )
    file_handler.setLevel(logging.DEBUG if settings.DEBUG else logging.INFO)
    file_handler.setFormatter(_formatter)
    logger.addHandler(file_handler)
except OSError:
    logger.warning(f"File logging disabled: cannot write to {LOG_DIR}")


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(f"promo_engine.{name}")
