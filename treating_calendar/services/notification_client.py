# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Notification client. Hands reminders to the notification service
over HTTP with a bounded timeout.
"""

from typing import Optional

import httpx

from treating_calendar.core.config import settings
from treating_calendar.core.logging import get_logger

logger = get_logger(__name__)


class NotificationClient:
    """Fire-and-forget sender. Failures are logged, never raised."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self._base_url = (base_url or settings.NOTIFICATION_SERVICE_URL).rstrip("/")
        self._timeout = timeout if timeout is not None else settings.NOTIFICATION_TIMEOUT

    def send(
        self,
        recipient: str,
        subject: str,
        message: str,
        channel: str = "email",
        reference: str = "N/A",
    ) -> bool:
        """Return True when the notification service accepted the message."""
        try:
            with httpx.Client(timeout=self._timeout) as client:
                resp = client.post(
                    f"{self._base_url}/api/v1/notify",
                    json={
                        "channel": channel,
                        "recipient": recipient,
                        "subject": subject,
                        "message": message,
                        "reference": reference,
                    },
                )
        except httpx.HTTPError as exc:
            logger.warning("Notification failed: recipient=%s, error=%s", recipient, exc)
            return False

        logger.info(
            "Notification sent: recipient=%s, channel=%s, status=%d",
            recipient, channel, resp.status_code,
        )
        return resp.status_code < 400
