"""Configuration management for the ecsctl application."""
import os
from typing import Callable, Optional, Union
from dotenv import load_dotenv

# Load environment variables from .env file if it exists
load_dotenv()

def _number(raw: str, cast: Callable[[str], Union[int, float]], default: Union[int, float]):
    """Parse a numeric setting, keeping the default when it is malformed.

    Config.validate() reports the malformed value, so importing never fails.
    """
    try:
        return cast(raw)
    except ValueError:
        return default

class Config:
    """Application configuration with sensible defaults."""

    # AWS session; boto3 falls back to its own credential chain when unset
    AWS_REGION: Optional[str] = os.getenv("AWS_REGION", os.getenv("AWS_DEFAULT_REGION")) or None
    AWS_PROFILE: Optional[str] = os.getenv("AWS_PROFILE") or None

    # Run task
    STARTED_BY: str = os.getenv("ECSCTL_STARTED_BY", "ecsctl")

    # Log following
    POLL_INTERVAL_RAW: str = os.getenv("ECSCTL_POLL_INTERVAL", "1.0")
    LOG_RETRY_LIMIT_RAW: str = os.getenv("ECSCTL_LOG_RETRY_LIMIT", "50")
    POLL_INTERVAL: float = _number(POLL_INTERVAL_RAW, float, 1.0)
    LOG_RETRY_LIMIT: int = _number(LOG_RETRY_LIMIT_RAW, int, 50)
    LOG_DRIVER: str = "awslogs"
    STOPPED_STATUS: str = "STOPPED"

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
    LOG_FORMAT: str = os.getenv(
        "LOG_FORMAT",
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    @classmethod
    def validate(cls) -> None:
        """Validate numeric settings."""
        for name, raw, cast in (
            ("ECSCTL_POLL_INTERVAL", cls.POLL_INTERVAL_RAW, float),
            ("ECSCTL_LOG_RETRY_LIMIT", cls.LOG_RETRY_LIMIT_RAW, int),
        ):
            try:
                cast(raw)
            except ValueError:
                raise ValueError(f"{name} must be a number, got {raw!r}") from None
        if cls.POLL_INTERVAL < 0:
            raise ValueError(f"ECSCTL_POLL_INTERVAL must not be negative, got {cls.POLL_INTERVAL}")
        if cls.LOG_RETRY_LIMIT < 1:
            raise ValueError(f"ECSCTL_LOG_RETRY_LIMIT must be at least 1, got {cls.LOG_RETRY_LIMIT}")

# Don't validate on import to allow for dynamic configuration
# Call Config.validate() explicitly when needed
