import logging
from typing import Any

import requests

from app.errors import network_error, transport_error
from app.models import APIResult, ErrorInfo

logger = logging.getLogger(__name__)


class ShiprocketHttpClient:
    """JSON transport for the Shiprocket external API. Never raises."""

    def __init__(self, base_url: str, session: requests.Session | None = None, timeout: float | None = None):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def request(
        self,
        endpoint: str,
        method: str = "GET",
        body: Any = None,
        token: str | None = None,
        params: dict | None = None,
    ) -> APIResult:
        url = f"{self.base_url}{endpoint}"
        headers = {"Content-Type": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"

        logger.info("[Shiprocket] %s %s", method, url)
        try:
            response = self.session.request(
                method,
                url,
                json=body,
                params=params,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error("[Shiprocket] Request failed: %s", e)
            return APIResult.failure(network_error(e))

        if not 200 <= response.status_code < 300:
            error = transport_error(response.status_code, response.reason or "", response.text)
            logger.error("[Shiprocket] Error: %s | %s", error.message, response.text)
            return APIResult.failure(error)

        try:
            data = response.json()
        except ValueError:
            logger.error("[Shiprocket] Non-JSON body from %s", url)
            return APIResult.failure(
                ErrorInfo(
                    message=f"Invalid JSON in response from {endpoint}",
                    status_code=response.status_code,
                    status_text="Invalid JSON",
                    raw_body=response.text,
                )
            )

        logger.debug("[Shiprocket] Success: %s %s", response.status_code, type(data).__name__)
        return APIResult.success(data)

    def get(self, endpoint: str, token: str | None = None, params: dict | None = None) -> APIResult:
        return self.request(endpoint, "GET", token=token, params=params)

    def post(self, endpoint: str, body: Any, token: str | None = None) -> APIResult:
        return self.request(endpoint, "POST", body=body, token=token)

    def put(self, endpoint: str, body: Any, token: str | None = None) -> APIResult:
        return self.request(endpoint, "PUT", body=body, token=token)

    def delete(self, endpoint: str, token: str | None = None) -> APIResult:
        return self.request(endpoint, "DELETE", token=token)
