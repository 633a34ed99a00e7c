"""
Default fault logger: Rich console output on stderr with optional file logging.
"""

import os
import datetime
import traceback
from enum import Enum
from typing import Any, Optional
from rich.console import Console
from rich.traceback import Traceback
from . import config


class LogLevel(Enum):
    INFO = "INFO"
    ERROR = "ERROR"
    WARNING = "WARNING"


class Logger:
    def __init__(self, log_file: Optional[str] = None, log_dir: Optional[str] = None,
                 console: Optional[Console] = None):
        if log_dir is None:
            log_dir = config.LOG_DIR
        if log_file is None:
            log_file = config.LOG_FILE
        self._log_dir = os.path.join(os.getcwd(), log_dir) if log_dir else None
        self._log_file = os.path.join(self._log_dir, log_file) if self._log_dir else None
        self.console = console if console is not None else Console(stderr=True)

        if self._log_dir:
            os.makedirs(self._log_dir, exist_ok=True)

    @staticmethod
    def _describe(arg: Any) -> str:
        if isinstance(arg, BaseException):
            return "".join(traceback.format_exception_only(type(arg), arg)).strip()
        return str(arg)

    def _join(self, args) -> str:
        return " ".join(self._describe(arg) for arg in args)

    def _format_message(self, level: LogLevel, message: str) -> str:
        """Format the log message with timestamp and level."""
        timestamp = datetime.datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        return f"{timestamp} | {level.value} | {message}"

    def _write_to_file(self, message: str):
        """Write the log message to the log file, if one is configured."""
        if not self._log_file:
            return
        try:
            raw_message = str(message).replace('\n', ' ')
            with open(self._log_file, "a", encoding="utf-8") as f:
                f.write(raw_message + "\n")
        except OSError as e:
            self.console.print(f"[red]Error writing to log file: {e}[/red]")

    def _print_to_console(self, level: LogLevel, message: str):
        if level == LogLevel.INFO:
            self.console.print(message, style="dim bright_white", markup=False, emoji=False)
        elif level == LogLevel.ERROR:
            self.console.print(message, style="red", markup=False, emoji=False)
        elif level == LogLevel.WARNING:
            self.console.print(message, style="yellow", markup=False, emoji=False)

    def log(self, level: LogLevel, *args: Any):
        """Log the space-joined arguments at the given level, plus the traceback of any exception argument."""
        message = self._join(args)
        self._write_to_file(self._format_message(level, message))
        self._print_to_console(level, message)
        for arg in args:
            if isinstance(arg, BaseException) and arg.__traceback__ is not None:
                self._log_traceback(level, arg)

    def _log_traceback(self, level: LogLevel, exc: BaseException):
        text = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)).strip()
        self._write_to_file(self._format_message(level, text))
        self.console.print(Traceback.from_exception(type(exc), exc, exc.__traceback__))

    def info(self, *args: Any):
        self.log(LogLevel.INFO, *args)

    def error(self, *args: Any):
        self.log(LogLevel.ERROR, *args)

    def warning(self, *args: Any):
        self.log(LogLevel.WARNING, *args)
