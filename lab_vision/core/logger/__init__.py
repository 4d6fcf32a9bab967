"""
Logging Package.

Exposes the Logger configuration class, the bootstrap project logger and the
banner styles used by the pipeline phases.
"""

from .logger import Logger, logger
from .styles import LogStyle

__all__ = ["Logger", "logger", "LogStyle"]
