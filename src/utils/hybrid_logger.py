import logging
from datetime import datetime
import sys
import traceback
from pathlib import Path
from contextlib import suppress
from typing import Optional, Dict

class ColoredFormatter(logging.Formatter):
    """Custom formatter with colors for stdout and brackets format"""

    # ANSI color codes
    COLORS = {
        'DEBUG': '\033[94m',    # Blue
        'INFO': '\033[92m',     # Green
        'WARNING': '\033[93m',  # Yellow
        'ERROR': '\033[91m',    # Red
        'CRITICAL': '\033[95m', # Magenta
        'RESET': '\033[0m'      # Reset
    }

    def __init__(self, use_colors: bool = False):
        self.use_colors = use_colors
        # Format: [time] [level] [class] message
        super().__init__('[%(asctime)s] [%(levelname)s] [%(class_name)s] %(message)s')

    def format(self, record: logging.LogRecord) -> str:
        if not hasattr(record, 'class_name'):
            record.class_name = 'Main'

        formatted = super().format(record)

        # Colors on the console only
        if self.use_colors:
            color = self.COLORS.get(record.levelname, self.COLORS['RESET'])
            formatted = f"{color}{formatted}{self.COLORS['RESET']}"

        return formatted


class ClassLogger:
    """Per-class logger wrapper with level filtering"""

    def __init__(self, main_logger: logging.Logger, class_name: str, level: int,
                 factory: Optional['HybridLogger'] = None):
        self.main_logger = main_logger
        self.class_name = class_name
        self.level = level
        self._factory = factory

    def _log(self, level: int, message: str, exc_info: bool = False) -> None:
        if level >= self.level:
            exc_info_tuple = sys.exc_info() if exc_info else None
            record = self.main_logger.makeRecord(
                self.main_logger.name, level, "", 0, message, (), exc_info_tuple
            )
            record.class_name = self.class_name
            self.main_logger.handle(record)

    def debug(self, message: str) -> None:
        self._log(logging.DEBUG, message)

    def info(self, message: str) -> None:
        self._log(logging.INFO, message)

    def warning(self, message: str) -> None:
        self._log(logging.WARNING, message)

    def error(self, message: str, exception: Optional[Exception] = None) -> None:
        """Log error message with optional exception details"""
        if exception:
            exc_type = type(exception).__name__
            tb = traceback.extract_tb(exception.__traceback__)
            filename, lineno, func, text = tb[-1] if tb else ("unknown", 0, "unknown", "")
            enhanced_message = f"{message} | Type: {exc_type} | File: {filename} | Line: {lineno}"
            self._log(logging.ERROR, enhanced_message, exc_info=True)
            self.flush()
        else:
            self._log(logging.ERROR, message)

    def critical(self, message: str) -> None:
        self._log(logging.CRITICAL, message)
        self.flush()

    def flush(self) -> None:
        """Flush every handler of the shared logger"""
        for handler in self.main_logger.handlers:
            with suppress(OSError, ValueError):
                handler.flush()

    def create_class_logger(self, class_name: str, level: Optional[int] = None) -> 'ClassLogger':
        """
        Create a sibling logger for another class, sharing the same handlers.

        Args:
            class_name: Name of the class for log identification
            level: Minimum log level (defaults to this logger's level)
        """
        if level is None:
            level = self.level
        if self._factory is not None:
            return self._factory.get_class_logger(class_name, level)
        return ClassLogger(self.main_logger, class_name, level)


class HybridLogger:
    """Enhanced logger factory with per-class logging and colored output"""

    def __init__(self, name: str = "app", log_dir: Optional[str] = "logs"):
        """
        Args:
            name: Logger name, also used as the log file prefix
            log_dir: Directory for timestamped log files, None for console only
        """
        self.name = name
        self.log_dir = log_dir
        self.main_logger: Optional[logging.Logger] = None
        self.class_loggers: Dict[str, ClassLogger] = {}
        self._setup_main_logger()

    def _setup_main_logger(self) -> None:
        """Create main logger with console and (optional) file handlers"""
        self.main_logger = logging.getLogger(self.name)
        self.main_logger.setLevel(logging.DEBUG)
        self.main_logger.propagate = False

        self.main_logger.handlers.clear()

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(ColoredFormatter(use_colors=True))
        self.main_logger.addHandler(console_handler)

        if self.log_dir is None:
            return

        Path(self.log_dir).mkdir(parents=True, exist_ok=True)
        log_filename = Path(self.log_dir) / f"{self.name}_{datetime.now().strftime('%Y-%m-%d_%H-%M-%S')}.log"

        file_handler = logging.FileHandler(log_filename, encoding="utf-8")
        file_handler.setFormatter(ColoredFormatter(use_colors=False))
        self.main_logger.addHandler(file_handler)

    def get_class_logger(self, class_name: str, level: int = logging.INFO) -> ClassLogger:
        """
        Get a logger for a specific class with custom log level

        Args:
            class_name: Name of the class for log identification
            level: Minimum log level (logging.DEBUG, INFO, WARNING, ERROR, CRITICAL)

        Returns:
            ClassLogger: Logger instance for the specified class
        """
        if class_name not in self.class_loggers:
            self.class_loggers[class_name] = ClassLogger(
                self.main_logger, class_name, level, factory=self
            )
        return self.class_loggers[class_name]

    def cleanup(self) -> None:
        """Clean up logger resources"""
        if self.main_logger:
            for handler in self.main_logger.handlers:
                with suppress(OSError, ValueError):
                    handler.flush()
                    handler.close()
            self.main_logger.handlers.clear()
