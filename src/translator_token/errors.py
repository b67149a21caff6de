"""Error taxonomy and the explicit result type returned by token fetches."""

from __future__ import annotations

import json
from dataclasses import dataclass

SUBSCRIPTION_KEY_HELP_URL = (
    "https://portal.azure.com/#create/Microsoft.CognitiveServices/apitype/TextTranslation"
)


class TranslatorServiceError(Exception):
    """Base class for every failure raised while obtaining an access token."""

    status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def clone(self) -> TranslatorServiceError:
        """Return a copy with the same attributes and no traceback."""
        clone = self.__class__.__new__(self.__class__)
        clone.args = self.args
        clone.__dict__.update(self.__dict__)
        clone.__cause__ = self.__cause__
        return clone


class ConfigurationError(TranslatorServiceError):
    """No subscription key was set when a token was requested."""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(
            message
            or (
                "A subscription key is required. Go to Azure Portal and sign up for "
                f"Microsoft Translator: {SUBSCRIPTION_KEY_HELP_URL}"
            ),
            status_code=400,
        )


class ServiceError(TranslatorServiceError):
    """The issuance endpoint answered with a non-success status.

    ``body`` is the response payload verbatim.  ``message`` is the
    ``error.message`` field when the payload is a Translator JSON error
    envelope, otherwise the raw body.
    """

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(_error_message(body) or f"HTTP {status_code}", status_code=status_code)
        self.body = body


class TransportError(TranslatorServiceError):
    """The network call itself failed (connection, DNS, timeout, ...)."""

    def __init__(self, message: str) -> None:
        super().__init__(message, status_code=500)


def _error_message(body: str) -> str:
    """Extract a human-readable message from an error payload."""
    try:
        payload = json.loads(body)
    except (TypeError, ValueError):
        return body
    if isinstance(payload, dict):
        error = payload.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        if payload.get("message"):
            return str(payload["message"])
    return body


@dataclass(frozen=True)
class TokenResult:
    """Outcome of a token fetch: either a ``value`` or an ``error``."""

    value: str | None = None
    error: TranslatorServiceError | None = None

    @classmethod
    def success(cls, value: str) -> TokenResult:
        return cls(value=value)

    @classmethod
    def failure(cls, error: TranslatorServiceError) -> TokenResult:
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> str:
        """Return the token value or raise a fresh copy of the carried error."""
        if self.error is not None:
            raise self.error.clone()
        if self.value is None:
            raise TranslatorServiceError("Token result carries neither a value nor an error")
        return self.value
