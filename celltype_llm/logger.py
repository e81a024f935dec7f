#!/usr/bin/env python3
"""
Logging configuration for the cell type identification package.
Provides one cached logger per module with a console handler and an
optional file handler.
"""

import logging
import os
import sys
from datetime import datetime
from typing import Optional

LOG_DIR_ENV_VAR = "CELLTYPE_LLM_LOG_DIR"
LOG_LEVEL_ENV_VAR = "CELLTYPE_LLM_LOG_LEVEL"


class PipelineLogger:
    """Manages logging configuration for the identification package."""

    _loggers = {}

    @classmethod
    def get_logger(
        cls,
        name: str,
        log_dir: Optional[str] = None,
        level: Optional[int] = None,
        log_file: Optional[str] = None
    ) -> logging.Logger:
        """
        Get or create a logger with a console handler and, if a log directory
        is configured, a file handler.

        Args:
            name: Logger name (typically __name__ of the module)
            log_dir: Directory to store log files. Falls back to the
                CELLTYPE_LLM_LOG_DIR environment variable; no file is written
                when neither is set.
            level: Logging level. Falls back to CELLTYPE_LLM_LOG_LEVEL, then INFO.
            log_file: Custom log file name (optional, auto-generated if None)

        Returns:
            Configured logger instance
        """
        if name in cls._loggers:
            return cls._loggers[name]

        if level is None:
            level_name = os.environ.get(LOG_LEVEL_ENV_VAR, "INFO").upper()
            level = getattr(logging, level_name, logging.INFO)
        if log_dir is None:
            log_dir = os.environ.get(LOG_DIR_ENV_VAR) or None

        logger = logging.getLogger(name)
        logger.setLevel(level)
        logger.propagate = False

        # Remove existing handlers to avoid duplicates
        logger.handlers.clear()

        console_formatter = logging.Formatter(
            '%(asctime)s | %(levelname)s | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        # stderr keeps stdout free for the printed summary
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)
        console_handler.setFormatter(console_formatter)
        logger.addHandler(console_handler)

        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
            if log_file is None:
                timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
                log_file = f"{name.split('.')[-1]}_{timestamp}.log"
            log_path = os.path.join(log_dir, log_file)

            file_formatter = logging.Formatter(
                '%(asctime)s | %(name)s | %(levelname)s | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            file_handler = logging.FileHandler(log_path, mode='a')
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(file_formatter)
            logger.addHandler(file_handler)
            logger.debug(f"Logger initialized. Log file: {log_path}")

        cls._loggers[name] = logger
        return logger

    @classmethod
    def set_level(cls, name: str, level: int):
        """Set logging level for a specific logger."""
        if name in cls._loggers:
            cls._loggers[name].setLevel(level)
            for handler in cls._loggers[name].handlers:
                if not isinstance(handler, logging.FileHandler):
                    handler.setLevel(level)

    @classmethod
    def get_all_log_files(cls, log_dir: str) -> list:
        """Get list of all log files in the log directory."""
        if not os.path.exists(log_dir):
            return []
        return [os.path.join(log_dir, f) for f in os.listdir(log_dir) if f.endswith('.log')]
