### Description ###
# Planner Suite - Multi-tenant Event Planning Platform
# - Custom Logger Setup -
# Author: Planner Suite Team
# Date: 10/18/2026
# Python: 3.11
####################

# Standard Imports
import logging
from datetime import datetime
from pathlib import Path

from planner_api.config import get_api_settings


class CustomFormatter(logging.Formatter):
    """Custom formatter for Planner Suite logging with specific time format"""

    def format(self, record):
        """
        Format log record with custom time format: HH:MM:SS AM/PM - name - LEVEL:

        Args:
            record: LogRecord instance

        Returns:
            Formatted log string
        """
        # Get timestamp in 12-hour format
        timestamp = datetime.fromtimestamp(record.created).strftime("%I:%M:%S %p")

        # Build the formatted message
        formatted_msg = f"{timestamp} - {record.name} - {record.levelname}: {record.getMessage()}"

        # Handle exceptions if present
        if record.exc_info:
            formatted_msg += "\n" + self.formatException(record.exc_info)

        return formatted_msg


def setup_logger(
    name: str,
    level: int | None = None,
    log_to_file: bool | None = None,
    log_to_console: bool = True,
) -> logging.Logger:
    """
    Set up a custom logger for Planner Suite

    Args:
        name: Logger name (typically __name__)
        level: Logging level (default: PLANNER_LOG_LEVEL)
        log_to_file: Whether to log to file (default: PLANNER_LOG_TO_FILE)
        log_to_console: Whether to log to console (default: True)

    Returns:
        Configured logger instance

    Example:
        logger = setup_logger(__name__)
        logger.info("This is an info message")
    """
    # Fall back to PLANNER_LOG_LEVEL and PLANNER_LOG_TO_FILE
    settings = get_api_settings()
    if level is None:
        level = logging.getLevelName(settings.log_level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    if log_to_file is None:
        log_to_file = settings.log_to_file

    # Create logger
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Prevent duplicate handlers if logger already exists
    if logger.handlers:
        return logger

    # Create custom formatter
    formatter = CustomFormatter()

    # Set up file logging if requested
    if log_to_file:
        # Create logs directory if it doesn't exist
        logs_dir = Path("logs")
        logs_dir.mkdir(exist_ok=True)

        # Create file handler with date-based filename
        log_filename = f"planner_suite_{datetime.now().strftime('%Y-%m-%d')}.log"
        log_filepath = logs_dir / log_filename

        file_handler = logging.FileHandler(log_filepath, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    # Set up console logging if requested
    if log_to_console:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get an existing logger or create a new one with default settings

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    return setup_logger(name)
