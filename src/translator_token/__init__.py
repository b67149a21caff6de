"""Azure Translator access-token provider."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("translator-token")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"

from translator_token.errors import (  # noqa: E402
    ConfigurationError,
    ServiceError,
    TokenResult,
    TranslatorServiceError,
    TransportError,
)
from translator_token.provider import TokenProvider, authorization_url  # noqa: E402
from translator_token.transport import (  # noqa: E402
    RequestsTransport,
    TokenRequest,
    TokenResponse,
    Transport,
)

__all__ = [
    "ConfigurationError",
    "RequestsTransport",
    "ServiceError",
    "TokenProvider",
    "TokenRequest",
    "TokenResponse",
    "TokenResult",
    "TranslatorServiceError",
    "Transport",
    "TransportError",
    "authorization_url",
]
