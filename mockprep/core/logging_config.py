"""
Logging for the mock interview API: stdout plus a rotating file.
"""
import logging
import sys
from pathlib import Path
from logging.handlers import RotatingFileHandler

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FILE = "mockprep.log"

# Request-level chatter from the server and the OpenAI HTTP client
NOISY_LOGGERS = ("uvicorn", "uvicorn.access", "openai", "httpx")

SENSITIVE_KEYS = ("token", "secret", "api_key", "authorization", "database_url")


def setup_logging(log_level: str = "INFO", log_dir: str = "logs"):
    """Route every `logging.getLogger(__name__)` logger to stdout and `<log_dir>/mockprep.log`."""
    level = getattr(logging, log_level.upper(), logging.INFO)
    formatter = logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    log_path = Path(log_dir)
    log_path.mkdir(exist_ok=True)
    file_handler = RotatingFileHandler(log_path / LOG_FILE, maxBytes=10 * 1024 * 1024, backupCount=5)

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()
    for handler in (logging.StreamHandler(sys.stdout), file_handler):
        handler.setLevel(level)
        handler.setFormatter(formatter)
        root.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def sanitize_log_data(data: dict) -> dict:
    """Copy of `data` with credential-like values replaced, for settings/log lines."""
    return {
        key: "***REDACTED***" if value and any(s in key.lower() for s in SENSITIVE_KEYS) else value
        for key, value in data.items()
    }
