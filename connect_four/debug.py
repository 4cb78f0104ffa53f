"""
debug.py - Logging facade for the Connect Four package

All modules log through the shared ``debug`` instance defined here. It wraps a
standard ``logging`` logger named ``connect_four`` and adds a TRACE level,
per-component filtering and simple timers.
"""

import logging
import sys
import time
from enum import Enum
from typing import Dict, List, Optional, Set


class DebugLevel(Enum):
    """Verbosity levels, from silent to the most detailed."""
    NONE = 0
    ERROR = 1
    WARNING = 2
    INFO = 3
    DEBUG = 4
    TRACE = 5


LEVEL_MAP = {
    DebugLevel.NONE: logging.CRITICAL + 10,
    DebugLevel.ERROR: logging.ERROR,
    DebugLevel.WARNING: logging.WARNING,
    DebugLevel.INFO: logging.INFO,
    DebugLevel.DEBUG: logging.DEBUG,
    DebugLevel.TRACE: logging.DEBUG,
}

LOGGER_NAME = "connect_four"
CONSOLE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class ConsoleHandler(logging.StreamHandler):
    """Writes to whatever sys.stdout is at the time of each record."""

    def emit(self, record):
        self.stream = sys.stdout
        super().emit(record)


class DebugManager:
    """Routes package log messages to the ``connect_four`` logger."""

    def __init__(self, level: DebugLevel = DebugLevel.WARNING):
        self._level = level
        self._enabled = True
        self._log_file: Optional[str] = None
        self._components: Set[str] = set()  # empty means every component
        self._timers: Dict[str, float] = {}
        self._logger = self._setup_logger()

    def _setup_logger(self) -> logging.Logger:
        """Configure and return the package logger."""
        logger = logging.getLogger(LOGGER_NAME)
        logger.setLevel(LEVEL_MAP[self._level])

        # Only one console handler, however many managers get created
        if not any(isinstance(h, ConsoleHandler) for h in logger.handlers):
            handler = ConsoleHandler(sys.stdout)
            handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt='%H:%M:%S'))
            logger.addHandler(handler)

        return logger

    @property
    def level(self) -> DebugLevel:
        """The most verbose level currently emitted."""
        return self._level

    @property
    def logger(self) -> logging.Logger:
        """The underlying ``logging`` logger."""
        return self._logger

    def configure(self, level: DebugLevel = None,
                  enabled: bool = None,
                  log_file: str = None,
                  components: List[str] = None):
        """
        Change debug settings. Arguments left as None keep their current value.

        Args:
            level: Most verbose level that will be emitted
            enabled: Master switch for all output
            log_file: Also write to this file ("" removes the file handler)
            components: Only log these components (empty list for all)
        """
        if level is not None:
            self._level = level
            self._logger.setLevel(LEVEL_MAP[level])

        if enabled is not None:
            self._enabled = enabled

        if log_file is not None:
            for handler in self._logger.handlers[:]:
                if isinstance(handler, logging.FileHandler):
                    self._logger.removeHandler(handler)
                    handler.close()

            self._log_file = log_file or None
            if self._log_file:
                file_handler = logging.FileHandler(self._log_file)
                file_handler.setFormatter(
                    logging.Formatter(CONSOLE_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
                self._logger.addHandler(file_handler)

        if components is not None:
            self._components = set(components)

    def is_enabled_for(self, level: DebugLevel, component: str = None) -> bool:
        """Determine if a message should be logged based on settings."""
        if not self._enabled or level == DebugLevel.NONE:
            return False
        if level.value > self._level.value:
            return False
        if component and self._components and component not in self._components:
            return False
        return True

    def log(self, level: DebugLevel, message: str, component: str = None):
        """
        Log a message at the specified level.

        Args:
            level: Debug level for the message
            message: The message to log
            component: Optional component name for filtering
        """
        if not self.is_enabled_for(level, component):
            return

        if component:
            message = f"[{component}] {message}"

        if level == DebugLevel.ERROR:
            self._logger.error(message)
        elif level == DebugLevel.WARNING:
            self._logger.warning(message)
        elif level == DebugLevel.INFO:
            self._logger.info(message)
        elif level == DebugLevel.DEBUG:
            self._logger.debug(message)
        else:
            self._logger.debug(f"TRACE: {message}")

    def error(self, message: str, component: str = None):
        """Log an error message."""
        self.log(DebugLevel.ERROR, message, component)

    def warning(self, message: str, component: str = None):
        """Log a warning message."""
        self.log(DebugLevel.WARNING, message, component)

    def info(self, message: str, component: str = None):
        """Log an info message."""
        self.log(DebugLevel.INFO, message, component)

    def debug(self, message: str, component: str = None):
        """Log a debug message."""
        self.log(DebugLevel.DEBUG, message, component)

    def trace(self, message: str, component: str = None):
        """Log a trace message."""
        self.log(DebugLevel.TRACE, message, component)

    def start_timer(self, name: str):
        """Start a timer for performance tracking."""
        self._timers[name] = time.perf_counter()

    def end_timer(self, name: str, component: str = None) -> Optional[float]:
        """
        Stop timer ``name`` and trace the elapsed time.

        Returns:
            Elapsed seconds, or None if the timer was never started
        """
        started = self._timers.pop(name, None)
        if started is None:
            self.warning(f"Timer '{name}' not started", "debug")
            return None

        elapsed = time.perf_counter() - started
        self.trace(f"Timer [{name}]: {elapsed:.6f} seconds", component)
        return elapsed

    def set_from_string(self, level_str: str) -> bool:
        """Set the level from a command-line string such as "debug"."""
        try:
            level = DebugLevel[level_str.strip().upper()]
        except KeyError:
            self.warning(f"Unknown debug level: {level_str}")
            return False

        self.configure(level=level)
        self.info(f"Debug level set to {level.name}")
        return True


debug = DebugManager()
