"""
HTTP client for the medication reminder backend.
"""
import logging
from typing import List, Optional

import httpx
from pydantic import ValidationError

from app.schemas.sche_medication import MedicationResponse

logger = logging.getLogger(__name__)


class ApiClientError(Exception):
    pass


class MedicationApiClient:
    """
    Fetches the signed-in user's medications.

    Args:
        base_url: Backend root including the API prefix, e.g. "http://localhost:8000/api".
        token: Bearer token from /auth/login.
        transport: Optional httpx transport (used by tests).
    """

    def __init__(self, base_url: str, token: Optional[str] = None, timeout: float = 10.0,
                 transport: Optional[httpx.BaseTransport] = None):
        self.base_url = base_url.rstrip('/')
        self.token = token
        self.timeout = timeout
        self._transport = transport

    def _headers(self) -> dict:
        return {'Authorization': f'Bearer {self.token}'} if self.token else {}

    def get_medications(self) -> List[MedicationResponse]:
        try:
            with httpx.Client(base_url=self.base_url, timeout=self.timeout, transport=self._transport) as client:
                response = client.get('/medications', headers=self._headers())
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as e:
            raise ApiClientError(f"GET /medications failed with {e.response.status_code}") from e
        except (httpx.HTTPError, ValueError) as e:
            raise ApiClientError(f"GET /medications failed: {e}") from e

        items = payload.get('data') if isinstance(payload, dict) else payload
        try:
            return [MedicationResponse.model_validate(item) for item in items or []]
        except ValidationError as e:
            raise ApiClientError(f"Unexpected medication payload: {e}") from e
