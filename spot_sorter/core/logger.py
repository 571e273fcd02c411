"""
Logging configuration for spot-sorter.

This module sets up the logging system with multiple outputs:
    - Console: Real-time messages with tqdm-compatible formatting
    - log_full.log: Complete log of all events (DEBUG and above)
    - log_errors.log: Only ERROR and CRITICAL level messages
    - moves.log: Every move issued to the playlist container, one per line

The logging system follows the principle: everything to screen is also saved
to file, then filtered into specialized files.

Log File Locations:
    All log files are created in <output directory>/logs, with a
    timestamp in the file name so each run keeps its own files.

Usage:
    from spot_sorter.core.logger import setup_logging, get_logger

    setup_logging(output_dir)  # Call once at startup
    logger = get_logger(__name__)  # Get logger for each module

    logger.info("Reordering 42 playlists and playlist folders")
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import TextIO

from tqdm import tqdm


# Log format for file output (detailed with timestamp)
FILE_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
FILE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


# ANSI color codes
class Colors:
    """ANSI color codes for terminal output."""
    RESET = "\033[0m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    WHITE = "\033[37m"
    BOLD = "\033[1m"


class ColoredConsoleFormatter(logging.Formatter):
    """
    Custom formatter that adds colors to console output.

    Colors:
        - DEBUG: Blue
        - INFO: Green
        - WARNING: Yellow
        - ERROR: Red
        - CRITICAL: Bold Red
    """

    LEVEL_COLORS = {
        logging.DEBUG: Colors.BLUE,
        logging.INFO: Colors.GREEN,
        logging.WARNING: Colors.YELLOW,
        logging.ERROR: Colors.RED,
        logging.CRITICAL: Colors.BOLD + Colors.RED,
    }

    def format(self, record: logging.LogRecord) -> str:
        color = self.LEVEL_COLORS.get(record.levelno, Colors.WHITE)
        colored_levelname = f"{color}{record.levelname}{Colors.RESET}"
        return f"{colored_levelname}: {record.getMessage()}"


class TqdmLoggingHandler(logging.Handler):
    """
    Logging handler that writes to console without breaking progress bars.

    Uses tqdm.write(), which prints above any active bar instead of
    tearing through it with carriage returns.
    """

    def __init__(self, stream: TextIO = sys.stderr) -> None:
        super().__init__()
        self.stream = stream

    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = self.format(record)
            tqdm.write(msg, file=self.stream)
        except Exception:
            self.handleError(record)


class MoveReportHandler(logging.Handler):
    """
    Custom handler that writes every issued move to the moves report file.

    The handler only reacts to log records carrying the extra fields set
    by log_move(); everything else is ignored. Report format:

        0003 -> 0000  Acoustic Mornings
        0007 -> 0001  Chill [folder]

    Extra fields read from the record:
        - 'move_source': Position the entry was moved from
        - 'move_destination': Position it was moved to
        - 'move_name': Entry name (optional)
        - 'move_is_folder': True for folder markers (optional)

    Attributes:
        report_path: Path to the moves log file.
        report_file: Open file handle (set by open()).
    """

    def __init__(self, report_path: Path) -> None:
        super().__init__()
        self.report_path = report_path
        self.report_file: TextIO | None = None

    def open(self) -> None:
        """
        Open the report file for writing.

        Called by setup_logging() after handler is created.
        File is opened in write mode (overwrites existing content).
        """
        self.report_file = open(self.report_path, "w", encoding="utf-8")

    def emit(self, record: logging.LogRecord) -> None:
        if not hasattr(record, "move_source"):
            return

        if self.report_file is None:
            return

        try:
            source = getattr(record, "move_source")
            destination = getattr(record, "move_destination", None)
            name = getattr(record, "move_name", None) or ""
            suffix = " [folder]" if getattr(record, "move_is_folder", False) else ""

            self.report_file.write(f"{source:04d} -> {destination:04d}  {name}{suffix}\n")
            self.report_file.flush()
        except Exception:
            self.handleError(record)

    def close(self) -> None:
        """
        Close the report file handle.

        Safe to call multiple times.
        """
        if self.report_file is not None:
            self.report_file.close()
            self.report_file = None
        super().close()


class ErrorOnlyFilter(logging.Filter):
    """
    Filter that only allows ERROR and CRITICAL level records.

    Used by the error log file handler to exclude DEBUG, INFO, and WARNING.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno >= logging.ERROR


def setup_logging(output_dir: Path, verbose: bool = False) -> Path:
    """
    Configure the logging system for the application.

    This function should be called ONCE at application startup, after
    the configuration is loaded but before any other operations.

    Args:
        output_dir: Directory where log files will be created.
                    Logs are stored in a 'logs' subdirectory.
        verbose: Show DEBUG messages on the console as well.

    Returns:
        Path of the logs directory.

    Behavior:
        1. Create output_dir/logs if it doesn't exist
        2. Configure root logger level to DEBUG and drop old handlers
        3. Console handler (TqdmLoggingHandler), INFO or DEBUG
        4. log_full_{timestamp}.log, DEBUG
        5. log_errors_{timestamp}.log, filtered to ERROR+
        6. moves_{timestamp}.log via MoveReportHandler
    """
    logs_dir = output_dir / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    root_logger.handlers.clear()

    console_handler = TqdmLoggingHandler()
    console_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
    console_handler.setFormatter(ColoredConsoleFormatter())
    root_logger.addHandler(console_handler)

    full_log_path = logs_dir / f"log_full_{timestamp}.log"
    full_handler = logging.FileHandler(full_log_path, mode="w", encoding="utf-8")
    full_handler.setLevel(logging.DEBUG)
    full_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT, FILE_DATE_FORMAT))
    root_logger.addHandler(full_handler)

    error_log_path = logs_dir / f"log_errors_{timestamp}.log"
    error_handler = logging.FileHandler(error_log_path, mode="w", encoding="utf-8")
    error_handler.setLevel(logging.DEBUG)  # Filter handles the level restriction
    error_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT, FILE_DATE_FORMAT))
    error_handler.addFilter(ErrorOnlyFilter())
    root_logger.addHandler(error_handler)

    moves_path = logs_dir / f"moves_{timestamp}.log"
    moves_handler = MoveReportHandler(moves_path)
    moves_handler.open()
    root_logger.addHandler(moves_handler)

    # spotipy and urllib3 are chatty at DEBUG
    logging.getLogger("spotipy").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    return logs_dir


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a module.

    Args:
        name: The logger name, typically __name__ of the calling module.

    Returns:
        logging.Logger: A logger instance configured by setup_logging().

    Note:
        Loggers obtained before setup_logging() is called will have no
        handlers and will not produce output.
    """
    return logging.getLogger(name)


def log_move(
    logger: logging.Logger,
    source: int,
    destination: int,
    name: str | None = None,
    is_folder: bool = False
) -> None:
    """
    Log one issued move with the extra fields MoveReportHandler expects.

    Args:
        logger: Logger to emit through.
        source: Position the entry is moved from.
        destination: Position it is moved to.
        name: Entry name, when known.
        is_folder: True if the moved entry is a folder marker.
    """
    logger.debug(
        f"Moving entry at {source} -> {destination}" + (f" ({name})" if name else ""),
        extra={
            "move_source": source,
            "move_destination": destination,
            "move_name": name,
            "move_is_folder": is_folder,
        }
    )


def shutdown_logging() -> None:
    """
    Properly shut down the logging system.

    Flushes, closes and removes all root handlers. Typically called in a
    finally block at application exit.
    """
    root_logger = logging.getLogger()

    for handler in root_logger.handlers[:]:
        handler.flush()
        handler.close()
        root_logger.removeHandler(handler)
