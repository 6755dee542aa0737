"""Logging configuration for the ecsctl package."""
import logging
import sys

from ecsctl.config import Config

NOISY_LOGGERS = ("boto3", "botocore", "urllib3", "s3transfer")

def setup_logging(debug_mode: bool = False) -> logging.Logger:
    """
    Configure the root logger for a CLI invocation.

    Diagnostics go to stderr so stdout only carries command output.

    Args:
        debug_mode: Log at DEBUG and let the AWS SDK loggers through

    Returns:
        The root logger
    """
    log_level = logging.DEBUG if debug_mode else getattr(logging, Config.LOG_LEVEL, logging.INFO)
    root = logging.getLogger()
    root.setLevel(log_level)

    # Don't add handlers if they're already configured
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(Config.LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
        root.addHandler(handler)

    # Disable debug logging for noisy libraries
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG if debug_mode else logging.WARNING)

    return root
