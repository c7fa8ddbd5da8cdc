"""
Error taxonomy for the Shiprocket gateway.

Below the service layer every failure travels as an `ErrorInfo` inside an
`APIResult`; the service layer raises the matching `ShiprocketError` so the
routers can answer with `{"success": false, "error": ...}`.
"""
from app.models import ErrorInfo

CONFIGURATION_ERROR = "Configuration Error"
UNAUTHORIZED = "Unauthorized"
BAD_REQUEST = "Bad Request"
NETWORK_ERROR = "Network Error"


def configuration_error(errors: list[str]) -> ErrorInfo:
    return ErrorInfo(
        message=f"Configuration errors: {', '.join(errors)}",
        status_code=400,
        status_text=CONFIGURATION_ERROR,
    )


def authentication_error(message: str = "Authentication failed", raw_body=None) -> ErrorInfo:
    return ErrorInfo(message=message, status_code=401, status_text=UNAUTHORIZED, raw_body=raw_body)


def validation_error(missing: list[str]) -> ErrorInfo:
    return ErrorInfo(
        message=f"Missing required fields: {', '.join(missing)}",
        status_code=400,
        status_text=BAD_REQUEST,
        raw_body={"missing_fields": list(missing)},
    )


def transport_error(status_code: int, reason: str, body=None) -> ErrorInfo:
    return ErrorInfo(
        message=f"API Error: {status_code} {reason}".strip(),
        status_code=status_code,
        status_text=reason,
        raw_body=body,
    )


def network_error(exc: Exception) -> ErrorInfo:
    return ErrorInfo(
        message=str(exc) or exc.__class__.__name__,
        status_code=0,
        status_text=NETWORK_ERROR,
        raw_body=repr(exc),
    )


class ShiprocketError(Exception):
    def __init__(self, info: ErrorInfo):
        super().__init__(info.message)
        self.info = info

    @property
    def status_code(self) -> int:
        return self.info.status_code

    @staticmethod
    def from_info(info: ErrorInfo) -> "ShiprocketError":
        if info.status_text == CONFIGURATION_ERROR:
            return ConfigurationError(info)
        if info.status_code == 0:
            return NetworkError(info)
        if info.status_code == 401:
            return AuthenticationError(info)
        if info.status_text == BAD_REQUEST and isinstance(info.raw_body, dict) and "missing_fields" in info.raw_body:
            return ValidationError(info.raw_body["missing_fields"])
        return TransportError(info)


class ConfigurationError(ShiprocketError):
    pass


class AuthenticationError(ShiprocketError):
    pass


class TransportError(ShiprocketError):
    pass


class NetworkError(ShiprocketError):
    pass


class ValidationError(ShiprocketError):
    def __init__(self, missing_fields: list[str]):
        super().__init__(validation_error(missing_fields))
        self.missing_fields = list(missing_fields)
