"""
HTTP SMS gateway client.
The gateway takes a GET request with token, sender id, recipients and message.
"""
import logging
from typing import Optional

import httpx

from app.core.config import settings
from app.helpers.enums import NotificationChannel
from app.helpers.exception_handler import NotificationError

logger = logging.getLogger(__name__)


class SmsClient:

    def __init__(
        self,
        api_url: Optional[str] = None,
        api_token: Optional[str] = None,
        sender_id: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None
    ):
        self.api_url = api_url or settings.SMS_API_URL
        self.api_token = api_token if api_token is not None else settings.SMS_API_TOKEN
        self.sender_id = sender_id or settings.SMS_SENDER_ID
        self.timeout = timeout or settings.SMS_TIMEOUT_SECONDS
        self._transport = transport

    def send_sms(self, to: str, body: str) -> dict:
        if not to:
            raise NotificationError(NotificationChannel.SMS.value, "recipient number is empty")
        if not self.api_token:
            raise NotificationError(NotificationChannel.SMS.value, "SMS_API_TOKEN is not configured")

        params = {
            "token": self.api_token,
            "senderID": self.sender_id,
            "recipients": to,
            "message": body,
        }
        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                response = client.get(self.api_url, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            detail = (e.response.text or "non_2xx")[:240]
            raise NotificationError(NotificationChannel.SMS.value, f"{e.response.status_code} {detail}") from e
        except httpx.HTTPError as e:
            raise NotificationError(NotificationChannel.SMS.value, str(e)) from e

        logger.debug(f"SMS sent to {to}")
        try:
            return response.json()
        except ValueError:
            return {"raw": response.text}


def get_sms_client() -> SmsClient:
    return SmsClient()
