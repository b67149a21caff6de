"""Outbound HTTP transport used to reach the token issuance endpoint."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

import requests

from translator_token.errors import TransportError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


@dataclass(frozen=True)
class TokenRequest:
    """A POST to the issuance endpoint with an empty body."""

    url: str
    headers: dict[str, str] = field(default_factory=dict)
    method: str = "POST"


@dataclass(frozen=True)
class TokenResponse:
    """Status code and raw text body of an issuance response."""

    status_code: int
    text: str = ""

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


@runtime_checkable
class Transport(Protocol):
    """Anything able to send a :class:`TokenRequest`.

    Implementations raise :class:`TransportError` on network faults and
    return a :class:`TokenResponse` for every HTTP answer, successful or not.
    """

    def send(self, request: TokenRequest) -> TokenResponse: ...


class RequestsTransport:
    """:class:`Transport` backed by a ``requests.Session``."""

    def __init__(
        self,
        session: requests.Session | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._owns_session = session is None
        self.session = session or requests.Session()
        self.timeout = timeout

    def send(self, request: TokenRequest) -> TokenResponse:
        try:
            resp = self.session.request(
                request.method,
                request.url,
                headers=request.headers,
                data=b"",
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.warning("Token request to %s failed: %s", request.url, exc)
            raise TransportError(str(exc) or exc.__class__.__name__) from exc
        return TokenResponse(status_code=resp.status_code, text=resp.text)

    def close(self) -> None:
        """Close the underlying session if this transport created it."""
        if self._owns_session:
            self.session.close()
