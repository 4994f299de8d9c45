# Logging helpers with a coloured console formatter and optional file output.
import logging
from typing import Optional


class CustomFormatter(logging.Formatter):
    """
    A custom formatter for logging messages with different log levels.

    Attributes:
        grey (str): ANSI escape sequence for grey color.
        yellow (str): ANSI escape sequence for yellow color.
        red (str): ANSI escape sequence for red color.
        bold_red (str): ANSI escape sequence for bold red color.
        reset (str): ANSI escape sequence to reset color.
        FORMATS (dict): A dictionary mapping log levels to their respective log message formats.

    Usage:
        handler = logging.StreamHandler()
        handler.setFormatter(CustomFormatter())
        logging.getLogger().addHandler(handler)
    """
    grey = "\x1b[37;20m"
    yellow = "\x1b[33;20m"
    red = "\x1b[31;20m"
    bold_red = "\x1b[31;1m"
    dark_grey = "\x1b[30;1m"
    reset = "\x1b[0m"
    fmt = '[%(levelname)s] %(asctime)s %(name)s - %(message)s'

    FORMATS = {
        logging.DEBUG: dark_grey + fmt + reset,
        logging.INFO: grey + fmt + reset,
        logging.WARNING: yellow + fmt + reset,
        logging.ERROR: red + fmt + reset,
        logging.CRITICAL: bold_red + fmt + reset
    }

    def format(self, record):
        """
        Formats the log record based on its log level.

        Args:
            record (logging.LogRecord): The log record to be formatted.

        Returns:
            str: The formatted log message.
        """
        log_fmt = self.FORMATS.get(record.levelno, self.fmt)
        formatter = logging.Formatter(log_fmt)
        return formatter.format(record)


PLAIN_FORMAT = '[%(levelname)s] %(asctime)s %(name)s - %(message)s'


def get_logger(name: str) -> logging.Logger:
    """Return a module logger; handlers live on the root logger."""
    return logging.getLogger(name)


def _has_console_handler(root: logging.Logger) -> bool:
    return any(isinstance(h.formatter, CustomFormatter) for h in root.handlers)


def setup_console_logging(level: int = logging.INFO) -> None:
    """Attach the coloured console handler to the root logger once."""
    root = logging.getLogger()
    root.setLevel(level)
    if not _has_console_handler(root):
        ch = logging.StreamHandler()
        ch.setLevel(logging.DEBUG)
        ch.setFormatter(CustomFormatter())
        root.addHandler(ch)


def setup_file_logging(log_file: Optional[str], level: int = logging.INFO) -> None:
    """
    Configure root logging for the application.

    Adds the coloured console handler and, when a path is given,
    a plain-text file handler.

    Args:
        log_file: Path of the log file, or None/empty to log to the console only.
        level: Logging level for the root logger.
    """
    setup_console_logging(level)
    if not log_file:
        return

    root = logging.getLogger()
    fh = logging.FileHandler(log_file, encoding='utf-8')
    fh.setLevel(level)
    fh.setFormatter(logging.Formatter(PLAIN_FORMAT))
    root.addHandler(fh)
