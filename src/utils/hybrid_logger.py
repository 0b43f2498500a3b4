"""
Hybrid logger - colored console output plus a timestamped log file,
handed out as lightweight per-class loggers.
"""

import logging
import sys
import traceback
from contextlib import suppress
from datetime import datetime
from pathlib import Path
from typing import Dict, Optional


class ColoredFormatter(logging.Formatter):
    """Formatter producing '[time] [level] [class] message', optionally colored"""

    # ANSI color codes
    COLORS = {
        'DEBUG': '\033[94m',    # Blue
        'INFO': '\033[92m',     # Green
        'WARNING': '\033[93m',  # Yellow
        'ERROR': '\033[91m',    # Red
        'CRITICAL': '\033[95m', # Magenta
        'RESET': '\033[0m'
    }

    def __init__(self, use_colors: bool = False):
        self.use_colors = use_colors
        super().__init__('[%(asctime)s] [%(levelname)s] [%(class_name)s] %(message)s')

    def format(self, record: logging.LogRecord) -> str:
        if not hasattr(record, 'class_name'):
            record.class_name = 'Main'

        formatted = super().format(record)

        if self.use_colors:
            color = self.COLORS.get(record.levelname, self.COLORS['RESET'])
            formatted = f"{color}{formatted}{self.COLORS['RESET']}"

        return formatted


class ClassLogger:
    """
    Per-class logger wrapper with its own level filter.

    All class loggers share the handlers of the owning HybridLogger, so
    every line ends up both on the console and in the session log file.
    """

    def __init__(self, owner: 'HybridLogger', class_name: str, level: int):
        self.owner = owner
        self.class_name = class_name
        self.level = level

    def _log(self, level: int, message: str, exception: Optional[BaseException] = None) -> None:
        if level < self.level:
            return
        main_logger = self.owner.main_logger
        exc_info = (type(exception), exception, exception.__traceback__) if exception is not None else None
        record = main_logger.makeRecord(
            main_logger.name, level, "", 0, message, (), exc_info
        )
        record.class_name = self.class_name
        main_logger.handle(record)

    def debug(self, message: str) -> None:
        self._log(logging.DEBUG, message)

    def info(self, message: str) -> None:
        self._log(logging.INFO, message)

    def warning(self, message: str) -> None:
        self._log(logging.WARNING, message)

    def error(self, message: str, exception: Optional[BaseException] = None) -> None:
        """Log an error, appending type/file/line details when an exception is given"""
        if exception is None:
            self._log(logging.ERROR, message)
            return

        exc_type = type(exception).__name__
        tb = traceback.extract_tb(exception.__traceback__)
        filename, lineno = (tb[-1].filename, tb[-1].lineno) if tb else ("unknown", 0)
        self._log(
            logging.ERROR,
            f"{message} | Type: {exc_type} | File: {filename} | Line: {lineno}",
            exception=exception
        )
        self.flush()

    def critical(self, message: str) -> None:
        self._log(logging.CRITICAL, message)
        self.flush()

    def flush(self) -> None:
        """Flush all handlers so nothing is lost if the process dies"""
        self.owner.flush()

    def create_class_logger(self, class_name: str, level: Optional[int] = None) -> 'ClassLogger':
        """
        Create a sibling logger for another class.

        Args:
            class_name: Name shown in the log line
            level: Minimum level; defaults to this logger's level

        Returns:
            ClassLogger sharing the same handlers
        """
        return self.owner.get_class_logger(class_name, self.level if level is None else level)


class HybridLogger:
    """Logger factory with per-class loggers, colored console and file output"""

    def __init__(self, name: str = "simon", log_dir: str = "logs", console: bool = True):
        self.name = name
        self.log_dir = log_dir
        self.console = console
        self.main_logger: Optional[logging.Logger] = None
        self.class_loggers: Dict[str, ClassLogger] = {}
        self.log_file: Optional[Path] = None
        self._setup_main_logger()

    def _setup_main_logger(self) -> None:
        Path(self.log_dir).mkdir(parents=True, exist_ok=True)
        self.log_file = Path(self.log_dir) / f"{self.name}_{datetime.now().strftime('%Y-%m-%d_%H-%M-%S')}.log"

        self.main_logger = logging.getLogger(self.name)
        self.main_logger.setLevel(logging.DEBUG)
        self.main_logger.propagate = False
        self.main_logger.handlers.clear()

        if self.console:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setFormatter(ColoredFormatter(use_colors=True))
            self.main_logger.addHandler(console_handler)

        file_handler = logging.FileHandler(self.log_file, encoding="utf-8")
        file_handler.setFormatter(ColoredFormatter(use_colors=False))
        self.main_logger.addHandler(file_handler)

    def get_class_logger(self, class_name: str, level: int = logging.INFO) -> ClassLogger:
        """
        Get (or create) the logger for a class.

        Args:
            class_name: Name of the class for log identification
            level: Minimum log level for this class

        Returns:
            ClassLogger instance
        """
        if class_name not in self.class_loggers:
            self.class_loggers[class_name] = ClassLogger(self, class_name, level)
        return self.class_loggers[class_name]

    def get_main_logger(self, level: int = logging.INFO) -> ClassLogger:
        """Convenience accessor for the 'Main' class logger"""
        return self.get_class_logger("Main", level)

    def flush(self) -> None:
        if self.main_logger:
            for handler in self.main_logger.handlers:
                with suppress(OSError, ValueError):
                    handler.flush()

    def cleanup(self) -> None:
        """Flush and close all handlers"""
        if self.main_logger:
            for handler in self.main_logger.handlers:
                with suppress(OSError, ValueError):
                    handler.flush()
                    handler.close()
            self.main_logger.handlers.clear()
