"""
Exception hierarchy for the iNaturalist notifier.
"""
from typing import Optional


class NotifierError(Exception):
    """Base exception for all notifier errors."""


class ConfigError(NotifierError):
    """Missing or unparseable startup configuration."""


class FetchError(NotifierError):
    """Observations for a taxon could not be retrieved."""

    def __init__(self, message: str, taxon_id: Optional[int] = None):
        super().__init__(message)
        self.taxon_id = taxon_id


class FetchTransportError(FetchError):
    """The request never produced a response (DNS, connection, timeout)."""


class FetchStatusError(FetchError):
    """The API answered with something other than 200."""

    def __init__(self, message: str, status_code: int, taxon_id: Optional[int] = None):
        super().__init__(message, taxon_id=taxon_id)
        self.status_code = status_code


class FetchParseError(FetchError):
    """The response body was not the expected JSON document."""


class NotifyError(NotifierError):
    """A notification could not be delivered to ntfy."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
