"""
In-memory logging handler.

Captures engine log messages in a circular buffer so the CLI can report
them after a diff or merge.
"""

import logging
from collections import deque
from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class LogRecord:
    """A captured log record."""

    timestamp: datetime
    level: str
    logger_name: str
    message: str
    level_no: int

    def format(self, show_timestamp: bool = True, show_logger: bool = True) -> str:
        parts = []
        if show_timestamp:
            parts.append(self.timestamp.strftime("%H:%M:%S"))
        parts.append(f"[{self.level}]")
        if show_logger:
            # Keep the last 2 parts: "core.diff_logic"
            name_parts = self.logger_name.split(".")
            short_name = ".".join(name_parts[-2:]) if len(name_parts) > 2 else self.logger_name
            parts.append(short_name)
        parts.append(self.message)
        return " ".join(parts)


class MemoryLogHandler(logging.Handler):
    """
    Logging handler that stores records in memory.

    Uses a circular buffer to limit memory usage.
    """

    _instance: Optional["MemoryLogHandler"] = None

    def __init__(self, max_records: int = 1000):
        super().__init__()
        self._records: deque[LogRecord] = deque(maxlen=max_records)
        self.setLevel(logging.DEBUG)
        self.setFormatter(logging.Formatter("%(message)s"))

    @classmethod
    def get_instance(cls, max_records: int = 1000) -> "MemoryLogHandler":
        """Get or create the singleton instance."""
        if cls._instance is None:
            cls._instance = cls(max_records)
        return cls._instance

    def emit(self, record: logging.LogRecord) -> None:
        try:
            log_record = LogRecord(
                timestamp=datetime.fromtimestamp(record.created),
                level=record.levelname,
                logger_name=record.name,
                message=self.format(record),
                level_no=record.levelno,
            )
            self._records.append(log_record)
        except Exception:
            self.handleError(record)

    def get_records(
        self,
        min_level: int = logging.DEBUG,
        logger_filter: Optional[str] = None,
    ) -> list[LogRecord]:
        """
        Get stored records with optional filtering.

        Args:
            min_level: Minimum log level to include
            logger_filter: If set, only include loggers containing this string

        Returns:
            List of matching LogRecord objects
        """
        return [
            record for record in self._records
            if record.level_no >= min_level
            and (not logger_filter or logger_filter in record.logger_name)
        ]

    def clear(self) -> None:
        self._records.clear()


def setup_logging(level: int = logging.INFO, console: bool = True) -> MemoryLogHandler:
    """
    Setup logging with the memory handler.

    Args:
        level: Logging level for the package logger
        console: Whether to also log to stderr

    Returns:
        The MemoryLogHandler instance
    """
    handler = MemoryLogHandler.get_instance()

    package_logger = logging.getLogger("project_diff_tool")
    package_logger.setLevel(level)

    # Remove existing memory handlers to avoid duplicates
    for h in package_logger.handlers[:]:
        if isinstance(h, MemoryLogHandler):
            package_logger.removeHandler(h)

    package_logger.addHandler(handler)

    has_console = any(
        isinstance(h, logging.StreamHandler) and not isinstance(h, MemoryLogHandler)
        for h in package_logger.handlers
    )
    if console and not has_console:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.WARNING)
        console_handler.setFormatter(
            logging.Formatter("[%(levelname)s] %(name)s: %(message)s")
        )
        package_logger.addHandler(console_handler)

    return handler
