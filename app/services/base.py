from typing import Any

from app.models import APIResult
from app.services.protocols import AuthSource, Transport


class ShiprocketModule:
    def __init__(self, transport: Transport, auth: AuthSource):
        self.transport = transport
        self.auth = auth

    def _get(self, endpoint: str, params: dict | None = None) -> APIResult:
        token = self.auth.get_token()
        if not token.ok:
            return token
        return self.transport.get(endpoint, token=token.value, params=params)

    def _post(self, endpoint: str, body: Any) -> APIResult:
        token = self.auth.get_token()
        if not token.ok:
            return token
        return self.transport.post(endpoint, body, token=token.value)
