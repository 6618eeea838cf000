"""
Configuration settings for the iNaturalist notifier.
"""
import os
import re
from typing import List
from dotenv import load_dotenv

from exceptions import ConfigError

load_dotenv()

_INTEGER = re.compile(r"\A[0-9]+\Z")


class Config:
    """Application configuration."""

    # ntfy
    NTFY_TOKEN: str = os.getenv("NTFY_TOKEN", "")
    NTFY_URL: str = os.getenv("NTFY_URL", "")

    # What to watch
    PLACE_ID: str = os.getenv("PLACE_ID", "")
    TAXON_IDS: str = os.getenv("TAXON_IDS", "")

    # Application Settings
    POLL_INTERVAL_SECONDS: str = os.getenv("POLL_INTERVAL_SECONDS", "3600")
    REQUEST_TIMEOUT_SECONDS: str = os.getenv("REQUEST_TIMEOUT_SECONDS", "10")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    @classmethod
    def validate(cls) -> bool:
        """
        Validate that required configuration is present and parseable.

        Checks run in a fixed order so the first problem found is the one
        reported.

        Raises:
            ConfigError: with a diagnostic naming the offending variable
        """
        if not cls.NTFY_TOKEN:
            raise ConfigError("NTFY_TOKEN needs to be set.")
        if not cls.NTFY_URL:
            raise ConfigError("NTFY_URL should be the URL to your ntfy topic.")
        if not cls.PLACE_ID:
            raise ConfigError("PLACE_ID should be the iNaturalist place ID to watch.")
        if not cls.TAXON_IDS:
            raise ConfigError(
                "TAXON_IDS should be a list of taxon IDs, separated by commas. No spaces."
            )
        cls.place_id()
        cls.taxon_ids()
        cls.poll_interval()
        cls.request_timeout()
        return True

    @classmethod
    def place_id(cls) -> int:
        """Parse PLACE_ID as an integer."""
        if not _INTEGER.match(cls.PLACE_ID):
            raise ConfigError("Unable to convert place ID to integer")
        return int(cls.PLACE_ID)

    @classmethod
    def taxon_ids(cls) -> List[int]:
        """Parse TAXON_IDS, keeping the configured order."""
        ids = []
        for raw in cls.TAXON_IDS.split(","):
            # int() would accept " 42"; whitespace is a configuration mistake here
            if not _INTEGER.match(raw):
                raise ConfigError(f"Unable to convert taxon ID '{raw}' to integer")
            ids.append(int(raw))
        return ids

    @classmethod
    def poll_interval(cls) -> float:
        """Parse POLL_INTERVAL_SECONDS, which must be positive."""
        return _positive_seconds("POLL_INTERVAL_SECONDS", cls.POLL_INTERVAL_SECONDS)

    @classmethod
    def request_timeout(cls) -> float:
        """Parse REQUEST_TIMEOUT_SECONDS, which must be positive."""
        return _positive_seconds("REQUEST_TIMEOUT_SECONDS", cls.REQUEST_TIMEOUT_SECONDS)


def _positive_seconds(name: str, raw: str) -> float:
    try:
        seconds = float(raw)
    except (TypeError, ValueError):
        raise ConfigError(f"{name} should be a number of seconds, got '{raw}'") from None
    # float() also accepts "nan" and "inf"
    if not 0 < seconds < float("inf"):
        raise ConfigError(f"{name} must be a positive number of seconds.")
    return seconds
