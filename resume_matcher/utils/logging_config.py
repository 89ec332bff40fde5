"""
Logging setup shared by the API server and the batch importer.

Application loggers live under the ``resume_matcher`` namespace. Uvicorn's
loggers write to the same console handler so request lines and pipeline lines
interleave in one stream.
"""
import logging
import logging.config
import time
from datetime import date
from pathlib import Path
from typing import Any, Dict, Optional

from resume_matcher.utils import settings

NAMESPACE = "resume_matcher"

FORMATS = {
    "simple": "%(levelname)s %(name)s: %(message)s",
    "detailed": "%(asctime)s %(levelname)-7s [%(name)s:%(lineno)d] %(message)s",
}

# Third-party loggers that flood the output at INFO
QUIET_LOGGERS = {"pdfminer": "ERROR", "pymongo": "WARNING", "httpx": "WARNING"}

MAX_LOG_BYTES = 10 * 1024 * 1024
LOG_BACKUPS = 5


def _rotating_file(path: Path, level: str) -> Dict[str, Any]:
    return {
        "class": "logging.handlers.RotatingFileHandler",
        "level": level,
        "formatter": "detailed",
        "filename": str(path),
        "maxBytes": MAX_LOG_BYTES,
        "backupCount": LOG_BACKUPS,
        "encoding": "utf8",
    }


def setup_logging(
    level: str = "INFO",
    enable_file: bool = True,
    format_style: str = "detailed",
    log_dir: Optional[str] = None,
) -> None:
    """Install console logging plus, optionally, a daily log and an errors-only log.

    Files are written to ``log_dir`` (``LOG_DIR`` by default) as
    ``resume_matcher_<YYYYMMDD>.log`` and ``resume_matcher_errors_<YYYYMMDD>.log``.
    """
    handlers: Dict[str, Dict[str, Any]] = {
        "console": {
            "class": "logging.StreamHandler",
            "level": level,
            "formatter": format_style if format_style in FORMATS else "detailed",
            "stream": "ext://sys.stdout",
        }
    }

    if enable_file:
        directory = Path(log_dir or settings.LOG_DIR)
        directory.mkdir(parents=True, exist_ok=True)
        stamp = date.today().strftime("%Y%m%d")
        handlers["file"] = _rotating_file(directory / f"resume_matcher_{stamp}.log", level)
        handlers["error_file"] = _rotating_file(directory / f"resume_matcher_errors_{stamp}.log", "ERROR")

    server_logger = {"level": "INFO", "handlers": ["console"], "propagate": False}
    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            style: {"format": fmt, "datefmt": "%Y-%m-%d %H:%M:%S"} for style, fmt in FORMATS.items()
        },
        "handlers": handlers,
        "root": {"level": level, "handlers": list(handlers)},
        "loggers": {
            "uvicorn": dict(server_logger),
            "uvicorn.access": dict(server_logger),
            **{name: {"level": quiet_level} for name, quiet_level in QUIET_LOGGERS.items()},
        },
    })

    get_logger("logging").debug(f"Logging at {level} to {', '.join(handlers)}")


def get_logger(name: str) -> logging.Logger:
    """Return a logger inside the resume_matcher namespace."""
    if name == NAMESPACE or name.startswith(NAMESPACE + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{NAMESPACE}.{name}")


def configure_for_environment(environment: Optional[str] = None) -> None:
    """Apply the logging preset for ``ENVIRONMENT``.

    ``testing`` logs warnings to the console only. Every other environment
    also writes log files; the level is ``LOG_LEVEL`` when set, else DEBUG for
    ``development`` and INFO otherwise.
    """
    environment = (environment or settings.ENVIRONMENT).strip().lower()
    if environment == "testing":
        setup_logging(level="WARNING", enable_file=False, format_style="simple")
        return

    default_level = "DEBUG" if environment == "development" else "INFO"
    setup_logging(level=(settings.LOG_LEVEL or default_level).upper())


class PerformanceMonitor:
    """Times a block and logs it; slow or failed blocks are logged louder.

    ``elapsed_ms`` is set when the block exits.
    """

    def __init__(self, operation_name: str, logger: Optional[logging.Logger] = None, threshold_ms: float = 1000):
        self.operation_name = operation_name
        self.logger = logger or get_logger("performance")
        self.threshold_ms = threshold_ms
        self.elapsed_ms: Optional[float] = None
        self._started = 0.0

    def __enter__(self):
        self._started = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.elapsed_ms = (time.perf_counter() - self._started) * 1000
        took = f"{self.operation_name} took {self.elapsed_ms:.1f}ms"

        if exc_type is not None:
            self.logger.error(f"{took} and failed: {exc_val}")
        elif self.elapsed_ms > self.threshold_ms:
            self.logger.warning(f"{took}, over the {self.threshold_ms:.0f}ms threshold")
        else:
            self.logger.debug(took)
        return False
