"""Client for Policy Decision Point authorization checks."""

from .client import PDPClient, PDPClientBuilder
from .config import ClientConfig, ClientConfigBuilder
from .decoder import JsonValue, as_text, decode_as_map, decode_as_tree
from .endpoint import build_endpoint
from .errors import (
    ConfigurationError,
    MalformedEndpoint,
    MalformedResponse,
    PDPClientError,
    RetryExhausted,
    TransportFailure,
)
from .models import (
    AuthorizationInput,
    AuthorizationRequest,
    ConnectionTuple,
    IncomingHttpRequest,
    Resources,
)
from .retry import RetryPolicy
from .transport import PDPTransport

__all__ = [
    "PDPClient",
    "PDPClientBuilder",
    "ClientConfig",
    "ClientConfigBuilder",
    "JsonValue",
    "as_text",
    "decode_as_map",
    "decode_as_tree",
    "build_endpoint",
    "ConfigurationError",
    "MalformedEndpoint",
    "MalformedResponse",
    "PDPClientError",
    "RetryExhausted",
    "TransportFailure",
    "AuthorizationInput",
    "AuthorizationRequest",
    "ConnectionTuple",
    "IncomingHttpRequest",
    "Resources",
    "RetryPolicy",
    "PDPTransport",
]
