import os
import sys
import logging
import logging.config
from pathlib import Path

# Remote service
API_URL = os.getenv("PLANSWITCH_API_URL", "https://api.zeit.co").rstrip("/")
DASHBOARD_URL = os.getenv("PLANSWITCH_DASHBOARD_URL", "https://zeit.co").rstrip("/")
HTTP_TIMEOUT = float(os.getenv("PLANSWITCH_HTTP_TIMEOUT", "60"))  # seconds
ENV_TOKEN = os.getenv("PLANSWITCH_TOKEN", "")

# Local configuration
GLOBAL_CONFIG_DIR = Path(
    os.getenv("PLANSWITCH_GLOBAL_CONFIG", str(Path.home() / ".now"))
).expanduser()
AUTH_CONFIG_NAME = "auth.json"
GLOBAL_CONFIG_NAME = "config.json"
CREDENTIALS_PROVIDER = "sh"

# Shown when the service refuses a plan change for lack of a payment method
BILLING_COMMAND = os.getenv("PLANSWITCH_BILLING_COMMAND", "now billing add")

# Logging Setup
LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING").upper()
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"
LOG_FILE_PATH = os.getenv("LOG_FILE_PATH", "")


class StderrHandler(logging.StreamHandler):
    """StreamHandler bound to whatever sys.stderr is at emit time."""

    def __init__(self):
        super().__init__(sys.stderr)

    @property
    def stream(self):
        return sys.stderr

    @stream.setter
    def stream(self, value):
        pass


LOGGING_CONFIG = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "standard": {
            "format": LOG_FORMAT,
        }
    },
    "handlers": {
        # stdout carries the status line only
        "console": {
            "()": StderrHandler,
            "level": "DEBUG",
            "formatter": "standard",
        },
    },
    "loggers": {
        "planswitch": {
            "handlers": ["console"],
            "level": LOG_LEVEL,
            "propagate": False,
        },
        "httpx": {"level": "WARNING"},
        "httpcore": {"level": "WARNING"},
    },
    "root": {
        "handlers": ["console"],
        "level": "WARNING",
    },
}

if LOG_FILE_PATH:
    Path(LOG_FILE_PATH).parent.mkdir(parents=True, exist_ok=True)
    LOGGING_CONFIG["handlers"]["file"] = {
        "class": "logging.handlers.RotatingFileHandler",
        "level": "DEBUG",
        "formatter": "standard",
        "filename": LOG_FILE_PATH,
        "maxBytes": 10 * 1024 * 1024,  # 10 MB
        "backupCount": 5,
        "encoding": "utf8",
    }
    LOGGING_CONFIG["loggers"]["planswitch"]["handlers"].append("file")

logging.config.dictConfig(LOGGING_CONFIG)
logger = logging.getLogger("planswitch")


def set_debug(enabled: bool) -> None:
    """Raise the planswitch logger to DEBUG for the current process."""
    if enabled:
        logger.setLevel(logging.DEBUG)
