"""
Capabilities the domain operations depend on.

Orders, tracking, pickups and rates only see these two contracts, so tests
can hand them a fake transport or a canned token source.
"""
from typing import Any, Protocol, runtime_checkable

from app.models import APIResult


@runtime_checkable
class Transport(Protocol):
    def request(
        self,
        endpoint: str,
        method: str = "GET",
        body: Any = None,
        token: str | None = None,
        params: dict | None = None,
    ) -> APIResult: ...

    def get(self, endpoint: str, token: str | None = None, params: dict | None = None) -> APIResult: ...

    def post(self, endpoint: str, body: Any, token: str | None = None) -> APIResult: ...


@runtime_checkable
class AuthSource(Protocol):
    def get_token(self) -> APIResult[str]: ...
