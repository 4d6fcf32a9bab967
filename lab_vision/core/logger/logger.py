"""
Logging Management Module

Handles centralized logging configuration with dynamic reconfiguration support.
Starts with console-only logging and switches to dual console+file logging
once a log directory is supplied (e.g. by the ``train`` command).

Key Features:
    - Singleton-like Behavior: Prevents duplicate logger configurations
    - Dynamic Reconfiguration: Switches from console-only to file-based logging
    - Rotating File Handler: Automatic log rotation with size limits
    - Timestamp-based Files: Unique log files per session
"""

# Standard Imports
import logging
import os
import sys
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Dict, Final, Optional

# Internal Imports
from ..paths import LOGGER_NAME


# LOGGER CLASS
class Logger:
    """
    Manages centralized logging configuration with singleton-like behavior.

    Class-level tracking (``_configured_names``) prevents duplicate handler
    registration, while passing a ``log_dir`` deliberately reconfigures the
    named logger to also write a rotating file.

    Attributes:
        name (str): Logger identifier (typically LOGGER_NAME constant)
        log_dir (Optional[Path]): Directory for log file storage
        log_to_file (bool): Enable file logging (requires log_dir)
        level (int): Logging level
        max_bytes (int): Maximum log file size before rotation (default: 5MB)
        backup_count (int): Number of rotated log files to retain (default: 5)
        logger (logging.Logger): Underlying Python logger instance

    Example:
        >>> logger = Logger.setup(name=LOGGER_NAME, log_dir=Path("./logs"))
        >>> logger.info("Logging to file now")
        >>> Logger.get_log_file()
    """

    _configured_names: Final[Dict[str, bool]] = {}
    _log_files: Final[Dict[str, Path]] = {}

    def __init__(
        self,
        name: str = LOGGER_NAME,
        log_dir: Optional[Path] = None,
        log_to_file: bool = True,
        level: int = logging.INFO,
        max_bytes: int = 5 * 1024 * 1024,
        backup_count: int = 5,
    ):
        self.name = name
        self.log_dir = log_dir
        self.log_to_file = log_to_file and (log_dir is not None)
        self.level = level
        self.max_bytes = max_bytes
        self.backup_count = backup_count

        self.logger = logging.getLogger(name)

        if name not in Logger._configured_names or log_dir is not None:
            self._setup_logger()
            Logger._configured_names[name] = True
        else:
            self.logger.setLevel(level)

    def _setup_logger(self) -> None:
        """
        Configures log handlers: console always, rotating file only with a log_dir.

        Existing handlers are closed and removed first so repeated setup calls
        never duplicate output.
        """
        formatter = logging.Formatter(
            "%(asctime)s - %(levelname)s - %(message)s",
            "%Y-%m-%d %H:%M:%S",
        )

        self.logger.setLevel(self.level)
        self.logger.propagate = False

        Logger._log_files.pop(self.name, None)
        if self.logger.hasHandlers():
            for handler in self.logger.handlers[:]:
                handler.close()
                self.logger.removeHandler(handler)

        console_h = logging.StreamHandler(sys.stdout)
        console_h.setFormatter(formatter)
        self.logger.addHandler(console_h)

        if self.log_to_file and self.log_dir:
            self.log_dir.mkdir(parents=True, exist_ok=True)
            timestamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
            filename = self.log_dir / f"{self.name}_{timestamp}.log"

            file_h = RotatingFileHandler(
                filename, maxBytes=self.max_bytes, backupCount=self.backup_count, encoding="utf-8"
            )
            file_h.setFormatter(formatter)
            self.logger.addHandler(file_h)

            Logger._log_files[self.name] = filename

    def get_logger(self) -> logging.Logger:
        """Returns the configured logging.Logger instance."""
        return self.logger

    @classmethod
    def get_log_file(cls, name: str = LOGGER_NAME) -> Optional[Path]:
        """Returns the active log file of logger ``name``, or None when console-only."""
        return cls._log_files.get(name)

    @classmethod
    def setup(
        cls, name: str = LOGGER_NAME, log_dir: Optional[Path] = None, level: str = "INFO", **kwargs
    ) -> logging.Logger:
        """
        Main entry point for configuring the logger, called by the CLI.

        Args:
            name: Logger identifier
            log_dir: Directory for log file storage (None = console-only mode)
            level: Logging level as string (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            **kwargs: Additional arguments passed to Logger constructor

        Environment Variables:
            DEBUG: If set to "1", overrides level to DEBUG
        """
        if os.getenv("DEBUG") == "1":
            numeric_level = logging.DEBUG
        else:
            numeric_level = getattr(logging, level.upper(), logging.INFO)

        return cls(name=name, log_dir=log_dir, level=numeric_level, **kwargs).get_logger()


# GLOBAL INSTANCE
# Console-only bootstrap instance, reconfigured by setup() from the CLI.
logger: Final[logging.Logger] = Logger().get_logger()
