import logging
from datetime import datetime, timezone
from typing import Callable

from app.config import TOKEN_TTL, Endpoints, ShiprocketSettings
from app.errors import authentication_error, configuration_error
from app.models import APIResult, Credential
from app.services.protocols import Transport

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ShiprocketAuth:
    """
    Holds the one shared Shiprocket credential.

    Unauthenticated until a login succeeds; drops back when `clear_auth()` is
    called or when `get_token()` finds the credential past its expiry.
    """

    def __init__(self, transport: Transport, settings: ShiprocketSettings, clock: Callable[[], datetime] = utc_now):
        self.transport = transport
        self.settings = settings
        self.clock = clock
        self._credential: Credential | None = None

    def authenticate(self) -> APIResult[str]:
        errors = self.settings.validate()
        if errors:
            logger.error("[Auth] Refusing to log in: %s", ", ".join(errors))
            return APIResult.failure(configuration_error(errors))

        now = self.clock()
        if self._credential and self._credential.is_valid(now):
            logger.debug("[Auth] Using cached token")
            return APIResult.success(self._credential.token)

        logger.info("[Auth] Authenticating with Shiprocket...")
        result = self.transport.post(
            Endpoints.AUTH,
            {"email": self.settings.email, "password": self.settings.password},
        )
        if not result.ok:
            logger.error("[Auth] Login rejected: %s", result.error.message)
            return result

        token = (result.value or {}).get("token") if isinstance(result.value, dict) else None
        if not token:
            return APIResult.failure(authentication_error("Authentication failed: no token in response", result.value))

        issued_at = self.clock()
        self._credential = Credential(token=token, issued_at=issued_at, expires_at=issued_at + TOKEN_TTL)
        logger.info("[Auth] Authentication successful, token valid until %s", self._credential.expires_at.isoformat())
        return APIResult.success(token)

    def get_token(self) -> APIResult[str]:
        return self.authenticate()

    def is_authenticated(self) -> bool:
        return self._credential is not None and self._credential.is_valid(self.clock())

    def clear_auth(self):
        self._credential = None
        logger.info("[Auth] Authentication cleared")

    def get_token_info(self) -> dict:
        info = {"hasToken": self._credential is not None}
        if self._credential is not None:
            info["expires"] = self._credential.expires_at.isoformat()
        info["isValid"] = self.is_authenticated()
        return info
