"""Logging setup for the application."""

import logging
import sys


def setup_logger(log_level: str = "INFO", name: str = "dependabot_dashboard") -> logging.Logger:
    """
    Configure console logging for a dashboard run.

    Progress (search, per-repository detail fetches, report path) goes to
    stdout at INFO; per-repository fetch failures and truncated searches are
    WARNINGs. Fatal errors are additionally printed to stderr by main.py.
    Rate-limit headers are only visible at DEBUG.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        name: Logger name (default: dependabot_dashboard)

    Returns:
        logging.Logger: Configured logger instance
    """
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=numeric_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
        stream=sys.stdout,
        force=True,  # Override any existing configuration
    )

    logger = logging.getLogger(name)
    logger.setLevel(numeric_level)

    return logger
