"""
Logging configuration for metadata-gen.

Configures the root logger from the ``logging`` section of the
configuration: a level, one of three output formats and an optional log
file. Library modules only ever call ``logging.getLogger(__name__)``;
handlers are installed here or by the CLI.
"""

import json
import logging
import logging.handlers
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union


class LogLevel(Enum):
    """Log level enumeration."""
    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL

    @classmethod
    def from_name(cls, name: str) -> "LogLevel":
        """Look up a level by case-insensitive name, e.g. "debug"."""
        try:
            return cls[name.strip().upper()]
        except KeyError as e:
            valid = ", ".join(level.name.lower() for level in cls)
            raise ValueError(f"Unknown log level '{name}' (expected one of: {valid})") from e


class LogFormat(Enum):
    """Log format types."""
    STANDARD = "standard"
    JSON = "json"
    DETAILED = "detailed"


_STANDARD_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
_DETAILED_FORMAT = (
    '%(asctime)s - %(name)s - %(levelname)s - %(module)s:%(funcName)s:%(lineno)d - %(message)s'
)


class JSONFormatter(logging.Formatter):
    """Formats each record as one JSON object per line.

    Structured fields passed as ``extra={"extra_data": {...}}`` are merged
    into the object.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "message": record.getMessage(),
        }

        extra_data = getattr(record, "extra_data", None)
        if isinstance(extra_data, Mapping):
            log_data.update(extra_data)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str, ensure_ascii=False, separators=(',', ':'))


def create_formatter(log_format: LogFormat) -> logging.Formatter:
    if log_format is LogFormat.JSON:
        return JSONFormatter()
    if log_format is LogFormat.DETAILED:
        return logging.Formatter(_DETAILED_FORMAT)
    return logging.Formatter(_STANDARD_FORMAT)


class LoggingManager:
    """
    Installs console and file handlers on the root logger.

    Existing root handlers are replaced, so constructing a manager twice
    never duplicates output.
    """

    def __init__(
        self,
        log_level: LogLevel = LogLevel.INFO,
        log_format: LogFormat = LogFormat.STANDARD,
        log_file: Optional[Union[str, Path]] = None,
        enable_console: bool = True,
        enable_rotation: bool = False,
        max_bytes: int = 10 * 1024 * 1024,
        backup_count: int = 5
    ):
        self.log_level = log_level
        self.log_format = log_format
        self.log_file = Path(log_file) if log_file else None
        self.enable_console = enable_console
        self.enable_rotation = enable_rotation
        self.max_bytes = max_bytes
        self.backup_count = backup_count

        self._setup_root_logger()

    def _setup_root_logger(self) -> None:
        root_logger = logging.getLogger()
        root_logger.setLevel(self.log_level.value)
        root_logger.handlers.clear()

        formatter = create_formatter(self.log_format)

        if self.enable_console:
            console_handler = logging.StreamHandler()
            console_handler.setLevel(self.log_level.value)
            console_handler.setFormatter(formatter)
            root_logger.addHandler(console_handler)

        if self.log_file:
            file_handler = self._create_file_handler()
            file_handler.setLevel(self.log_level.value)
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)

    def _create_file_handler(self) -> logging.Handler:
        self.log_file.parent.mkdir(parents=True, exist_ok=True)
        if self.enable_rotation:
            return logging.handlers.RotatingFileHandler(
                filename=self.log_file,
                maxBytes=self.max_bytes,
                backupCount=self.backup_count,
                encoding="utf-8"
            )
        return logging.FileHandler(self.log_file, encoding="utf-8")

    @classmethod
    def from_config(cls, logging_config: Mapping[str, Any], **kwargs) -> "LoggingManager":
        """Create a manager from the ``logging`` configuration section.

        Args:
            logging_config: Mapping with optional ``level``, ``format`` and
                ``file`` keys
            **kwargs: Extra LoggingManager arguments
        """
        level = LogLevel.from_name(logging_config.get("level", "info"))
        log_format = LogFormat(logging_config.get("format", LogFormat.STANDARD.value))
        return cls(
            log_level=level,
            log_format=log_format,
            log_file=logging_config.get("file"),
            **kwargs
        )
