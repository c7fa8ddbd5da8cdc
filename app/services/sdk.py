from datetime import datetime
from typing import Callable

from app.config import ShiprocketSettings
from app.services.auth import ShiprocketAuth, utc_now
from app.services.http_client import ShiprocketHttpClient
from app.services.orders import ShiprocketOrders
from app.services.pickups import ShiprocketPickups
from app.services.protocols import Transport
from app.services.rates import ShiprocketRates
from app.services.tracking import ShiprocketTracking


class ShiprocketSDK:
    """One transport and one credential cache shared by every module."""

    def __init__(
        self,
        settings: ShiprocketSettings,
        transport: Transport | None = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.settings = settings
        self.http = transport or ShiprocketHttpClient(settings.base_url, timeout=settings.http_timeout)
        self.auth = ShiprocketAuth(self.http, settings, clock=clock)
        self.orders = ShiprocketOrders(self.http, self.auth)
        self.tracking = ShiprocketTracking(self.http, self.auth)
        self.pickups = ShiprocketPickups(self.http, self.auth)
        self.rates = ShiprocketRates(self.http, self.auth, clock=clock)

    def is_authenticated(self) -> bool:
        return self.auth.is_authenticated()

    def clear_auth(self):
        self.auth.clear_auth()

    def get_token_info(self) -> dict:
        return self.auth.get_token_info()
