"""Posts a completion event to the configured webhook."""

import requests

from ..errors import NotificationFailed
from ..utils.log import get_logger

logger = get_logger("notification_dispatcher")

SYNC_MESSAGE = "Data synced successfully"


class NotificationDispatcher:
    """Sends exactly one JSON POST per successful ingestion. No retry."""

    def __init__(self, timeout: float = 10.0):
        self.timeout = timeout

    @staticmethod
    def build_payload(total_rows: int) -> dict:
        return {"message": SYNC_MESSAGE, "total_rows": int(total_rows)}

    def notify(self, endpoint_url: str, total_rows: int) -> None:
        """
        Notify the webhook that ``total_rows`` records were synced.

        Args:
            endpoint_url: Webhook URL
            total_rows: Number of records persisted

        Raises:
            NotificationFailed: On a blank URL, transport error or non-2xx response
        """
        url = (endpoint_url or "").strip()
        if not url:
            raise NotificationFailed("Webhook URL is empty")

        try:
            response = requests.post(url, json=self.build_payload(total_rows), timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            logger.warning("Webhook notification to %s failed: %s", url, e)
            raise NotificationFailed(f"Webhook notification failed: {e}") from e

        logger.info("Webhook %s notified (%d rows, HTTP %s)", url, total_rows, response.status_code)
