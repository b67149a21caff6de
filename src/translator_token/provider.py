"""Access-token provider for the Azure Translator service.

Exchanges a Cognitive Services subscription key for a short-lived bearer
token at the ``issueToken`` endpoint and caches it in memory.

Behaviour:
- Tokens are reused for ``TOKEN_CACHE_DURATION`` (8 min), less than the
  10 min lifetime granted by the service
- Changing the subscription key drops the cached token; changing the
  region only moves the endpoint used by the next fetch
- In-flight request deduplication (concurrent callers share one future)
- A failed fetch never evicts a token that is still within its TTL
"""

from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import Future
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import TYPE_CHECKING

from translator_token.errors import (
    ConfigurationError,
    ServiceError,
    TokenResult,
    TranslatorServiceError,
    TransportError,
)
from translator_token.transport import RequestsTransport, TokenRequest, Transport

if TYPE_CHECKING:
    from translator_token.settings import TranslatorSettings

logger = logging.getLogger(__name__)

OCP_APIM_SUBSCRIPTION_KEY_HEADER = "Ocp-Apim-Subscription-Key"
OCP_APIM_SUBSCRIPTION_REGION_HEADER = "Ocp-Apim-Subscription-Region"

GLOBAL_AUTHORIZATION_URL = "https://api.cognitive.microsoft.com/sts/v1.0/issueToken"
REGION_AUTHORIZATION_URL = "https://{region}.api.cognitive.microsoft.com/sts/v1.0/issueToken"

TOKEN_CACHE_DURATION = 480  # 8 minutes


def authorization_url(region: str | None) -> str:
    """Return the issuance endpoint for *region* (global when blank)."""
    if region and region.strip():
        return REGION_AUTHORIZATION_URL.format(region=region)
    return GLOBAL_AUTHORIZATION_URL


class TokenProvider:
    """Thread-safe, single-identity cache of Translator access tokens.

    One instance holds one subscription key.  Create it once next to the
    HTTP client that consumes the tokens and :meth:`close` it with that
    client.
    """

    def __init__(
        self,
        subscription_key: str | None = None,
        region: str | None = None,
        *,
        transport: Transport | None = None,
        timeout: float | None = None,
    ) -> None:
        self._lock = threading.Lock()
        self._owns_transport = transport is None
        self._transport: Transport = transport if transport is not None else RequestsTransport()
        self._closed = False
        self.timeout = timeout

        self._subscription_key: str | None = None
        self._region: str | None = None
        self._endpoint = GLOBAL_AUTHORIZATION_URL
        self._cached: tuple[float, str] | None = None
        # Bumped on every key change; a fetch only commits if it still matches.
        self._generation = 0
        self._inflight: Future[TokenResult] | None = None

        self.set_subscription_key(subscription_key)
        self.set_region(region)

    @classmethod
    def from_settings(
        cls,
        settings: TranslatorSettings,
        transport: Transport | None = None,
    ) -> TokenProvider:
        """Build a provider from :class:`TranslatorSettings`."""
        owns_transport = transport is None
        if transport is None:
            transport = RequestsTransport(timeout=settings.timeout)
        provider = cls(settings.subscription_key, settings.region, transport=transport)
        provider._owns_transport = owns_transport
        return provider

    # -- Identity -----------------------------------------------------------

    @property
    def subscription_key(self) -> str | None:
        return self._subscription_key

    @subscription_key.setter
    def subscription_key(self, value: str | None) -> None:
        self.set_subscription_key(value)

    def set_subscription_key(self, key: str | None) -> None:
        """Store *key*; a different key invalidates the cached token."""
        with self._lock:
            if key == self._subscription_key:
                return
            self._subscription_key = key
            self._cached = None
            self._generation += 1
            # Detach the old fetch; its result is not cached (generation mismatch).
            self._inflight = None
        logger.debug("Subscription key changed, cached token dropped")

    @property
    def region(self) -> str | None:
        return self._region

    @region.setter
    def region(self, value: str | None) -> None:
        self.set_region(value)

    def set_region(self, region: str | None) -> None:
        """Store *region* and recompute the issuance endpoint."""
        with self._lock:
            self._region = region
            self._endpoint = authorization_url(region)

    @property
    def endpoint(self) -> str:
        return self._endpoint

    @property
    def has_valid_token(self) -> bool:
        """``True`` when a cached token is still within its TTL."""
        with self._lock:
            return self._cached_token() is not None

    # -- Tokens -------------------------------------------------------------

    def get_access_token(self, timeout: float | None = None) -> str:
        """Return a ``Bearer <token>`` string, fetching one if needed.

        Raises :class:`ConfigurationError`, :class:`ServiceError` or
        :class:`TransportError`.  *timeout* bounds only this caller's wait;
        a fetch shared with other callers keeps running.
        """
        return self.fetch_access_token(timeout=timeout).unwrap()

    def fetch_access_token(self, timeout: float | None = None) -> TokenResult:
        """Like :meth:`get_access_token` but returns a :class:`TokenResult`."""
        if timeout is None:
            timeout = self.timeout

        with self._lock:
            if self._closed:
                return TokenResult.failure(TransportError("Token provider is closed"))

            key = self._subscription_key
            if not key or not key.strip():
                return TokenResult.failure(ConfigurationError())

            token = self._cached_token()
            if token is not None:
                logger.debug("Reusing cached access token")
                return TokenResult.success(token)

            future = self._inflight
            if future is None:
                request = TokenRequest(
                    url=self._endpoint,
                    headers={
                        OCP_APIM_SUBSCRIPTION_KEY_HEADER: key,
                        OCP_APIM_SUBSCRIPTION_REGION_HEADER: self._region or "",
                    },
                )
                future = Future()
                self._inflight = future
                threading.Thread(
                    target=self._issue,
                    args=(future, request, self._generation),
                    name="translator-token-fetch",
                    daemon=True,
                ).start()
            else:
                logger.debug("Waiting for in-flight token request")

        try:
            return future.result(timeout=timeout)
        except FutureTimeoutError:
            logger.warning("Gave up waiting for an access token after %ss", timeout)
            return TokenResult.failure(
                TransportError(f"Timed out after {timeout}s waiting for an access token")
            )

    def _cached_token(self) -> str | None:
        """Return the cached token if still valid, else ``None``.  Lock held."""
        if self._cached is None:
            return None
        ts, value = self._cached
        if time.monotonic() - ts < TOKEN_CACHE_DURATION:
            return value
        return None

    def _issue(self, future: Future[TokenResult], request: TokenRequest, generation: int) -> None:
        """Call the issuance endpoint and complete *future*; runs on its own thread."""
        logger.debug("Requesting access token from %s", request.url)
        try:
            response = self._transport.send(request)
            if response.ok:
                result = TokenResult.success(f"Bearer {response.text}")
            else:
                logger.warning(
                    "Token endpoint %s returned HTTP %s", request.url, response.status_code
                )
                result = TokenResult.failure(ServiceError(response.status_code, response.text))
        except TranslatorServiceError as exc:
            result = TokenResult.failure(exc)
        except Exception as exc:
            logger.warning("Token request to %s failed: %s", request.url, exc)
            result = TokenResult.failure(TransportError(str(exc) or exc.__class__.__name__))

        with self._lock:
            if generation == self._generation:
                if result.value is not None:
                    self._cached = (time.monotonic(), result.value)
                    logger.info("Access token issued by %s", request.url)
                self._inflight = None
        future.set_result(result)

    # -- Lifecycle ----------------------------------------------------------

    def close(self) -> None:
        """Refuse further fetches and close the transport if we created it."""
        with self._lock:
            self._closed = True
            self._inflight = None
        if self._owns_transport:
            close = getattr(self._transport, "close", None)
            if close is not None:
                close()

    def __enter__(self) -> TokenProvider:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
