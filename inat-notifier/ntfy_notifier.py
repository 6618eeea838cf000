"""
ntfy notifier for pushing observation alerts.
"""
import base64
import requests
import logging
from typing import Optional
from config import Config
from exceptions import NotifyError

logger = logging.getLogger(__name__)

OBSERVATION_URL = "https://www.inaturalist.org/observations/{id}"


class NtfyNotifier:
    """Publishes one ntfy message per new observation."""

    ACTION_TEMPLATE = "view, Open Observation, {url}, clear=true"

    def __init__(self, url: str, token: str, timeout: Optional[float] = None):
        """Initialize the notifier for one ntfy topic."""
        self.url = url
        self.token = token
        self.timeout = timeout if timeout is not None else Config.request_timeout()
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")
        logger.info("NtfyNotifier initialized")

    @staticmethod
    def _encode_title(title: str) -> str:
        # HTTP headers are latin-1 on the wire; ntfy decodes RFC 2047 words
        if title.isascii():
            return title
        encoded = base64.b64encode(title.encode("utf-8")).decode("ascii")
        return f"=?utf-8?b?{encoded}?="

    def _build_headers(self, title: str, observation_id: int) -> dict:
        return {
            "Title": self._encode_title(title),
            "Actions": self.ACTION_TEMPLATE.format(url=OBSERVATION_URL.format(id=observation_id)),
            "Content-Type": "text/plain",
            "Authorization": f"Bearer {self.token}",
        }

    def _publish(self, title: str, body: str, observation_id: int) -> None:
        try:
            response = requests.post(
                self.url,
                data=body.encode("utf-8"),
                headers=self._build_headers(title, observation_id),
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            raise NotifyError(f"error sending notification: {e}") from e

        if response.status_code != 200:
            raise NotifyError(
                f"error sending notification: {response.status_code}",
                status_code=response.status_code,
            )

    def send(self, title: str, body: str, observation_id: int) -> bool:
        """
        Send a single notification.

        Failures are logged and reported through the return value; nothing
        is retried.

        Returns:
            True if ntfy accepted the message
        """
        try:
            self._publish(title, body, observation_id)
        except NotifyError as e:
            logger.error(f"Notification for observation ID '{observation_id}' failed: {e}")
            return False
        return True
