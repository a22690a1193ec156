import logging
from typing import Any, Dict, List

import requests

from settings import settings

logger = logging.getLogger(__name__)


class APIError(Exception):
    def __init__(self, message: str, status: int = None):
        super().__init__(message)
        self.status = status


class TransactionAPI:
    """Thin client for the finance tracker HTTP API."""

    def __init__(self, base_url: str = None, timeout: float = 10, session: requests.Session = None):
        self.base_url = (base_url or settings.API_BASE_URL).rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def _get(self, path: str) -> Any:
        url = f"{self.base_url}{path}"
        logger.info("Making GET request to: %s", url)
        try:
            resp = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error("API error: url=%s message=%s", url, e)
            raise APIError(str(e)) from e

        if resp.status_code >= 400:
            try:
                message = resp.json().get("error") or resp.reason
            except ValueError:
                message = resp.reason
            logger.error("API error: url=%s status=%s message=%s", url, resp.status_code, message)
            raise APIError(message, status=resp.status_code)
        return resp.json()

    def get_all(self) -> List[Dict[str, Any]]:
        return self._get("/transactions")

    def get_dashboard_data(self) -> Dict[str, Any]:
        return self._get("/transactions/dashboard")

    def get_health(self) -> Dict[str, Any]:
        return self._get("/health")
