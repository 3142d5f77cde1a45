"""Logging configuration and utilities."""

import logging
import logging.handlers
import os
from pathlib import Path
from config.settings import settings

class CommandContextFilter(logging.Filter):
    """Filter to add the active collaborator command to log records."""

    def __init__(self):
        super().__init__()
        self.command = None

    def set_command_context(self, command: str):
        """Set the command context for this filter."""
        self.command = command

    def filter(self, record):
        """Add command context to the log record."""
        record.command = self.command or 'idle'
        return True

def get_logger(name: str, command: str = None) -> logging.Logger:
    """Get configured logger instance with optional command context."""
    logger = logging.getLogger(name)

    if not logger.handlers:
        # Configure logger
        level = getattr(logging, settings.get('logging.level', 'INFO').upper())
        logger.setLevel(level)

        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - [%(command)s] - %(levelname)s - %(message)s'
        )

        # Console handler
        if settings.get('logging.console', True):
            console_handler = logging.StreamHandler()
            console_handler.setLevel(level)
            console_handler.setFormatter(formatter)
            console_handler.addFilter(CommandContextFilter())
            logger.addHandler(console_handler)

        # File handler
        log_file = settings.get('logging.file', 'logs/adapter_dashboard.log')
        log_dir = os.path.dirname(log_file)
        if log_dir:
            Path(log_dir).mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=settings.get('logging.max_bytes', 10485760),
            backupCount=settings.get('logging.backup_count', 5)
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        file_handler.addFilter(CommandContextFilter())
        logger.addHandler(file_handler)

    if command:
        update_logger_command_context(logger, command)

    return logger

def update_logger_command_context(logger: logging.Logger, command: str):
    """Update the command context for an existing logger."""
    for handler in logger.handlers:
        for filter_obj in handler.filters:
            if isinstance(filter_obj, CommandContextFilter):
                filter_obj.set_command_context(command)

def suppress_console_logging():
    """Drop console handlers so live terminal views are not interleaved with log lines.

    File logging is left in place. Loggers created afterwards skip the console
    handler as well.
    """
    settings.config.setdefault('logging', {})['console'] = False
    for logger in logging.Logger.manager.loggerDict.values():
        if not isinstance(logger, logging.Logger):
            continue
        for handler in list(logger.handlers):
            if type(handler) is logging.StreamHandler:
                logger.removeHandler(handler)
