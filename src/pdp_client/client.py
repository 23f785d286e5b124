"""Python client for a Policy Decision Point."""

from __future__ import annotations

import time
from typing import Any, Callable, Dict, Mapping, Optional

import httpx

from .config import ClientConfig, ClientConfigBuilder
from .decoder import JsonValue, decode_as_map, decode_as_tree
from .endpoint import build_endpoint
from .retry import RetryPolicy
from .transport import Payload, PDPTransport


class PDPClient:
    """Asks the PDP for a decision on an authorization request.

    Configuration is resolved once, when the client is created; build a new
    client to change it. ``reload_from_env`` and ``set_transport`` are meant
    for start-up and tests and must not race with in-flight calls.
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        *,
        transport: Optional[httpx.BaseTransport] = None,
        environ: Optional[Mapping[str, str]] = None,
        sleep: Callable[[float], None] = time.sleep,
        overrides: Optional[Dict[str, Any]] = None,
    ) -> None:
        self._overrides = dict(overrides or {})
        self._sleep = sleep
        self._injected_transport = transport
        if config is None:
            config = ClientConfig.resolve(environ, **self._overrides)
        self._configure(config)

    @classmethod
    def builder(cls) -> "PDPClientBuilder":
        return PDPClientBuilder()

    def __enter__(self) -> "PDPClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _configure(self, config: ClientConfig) -> None:
        self._config = config
        self._transport = PDPTransport(config, transport=self._injected_transport, sleep=self._sleep)

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def retry_policy(self) -> RetryPolicy:
        return self._transport.retry_policy

    @property
    def schema(self) -> str:
        return self._config.schema

    @property
    def hostname(self) -> str:
        return self._config.hostname

    @property
    def port(self) -> int:
        return self._config.port

    @property
    def policy_path(self) -> str:
        return self._config.policy_path

    @property
    def connect_timeout_ms(self) -> int:
        return self._config.connect_timeout_ms

    @property
    def read_timeout_ms(self) -> int:
        return self._config.read_timeout_ms

    @property
    def retry_max_attempts(self) -> int:
        return self._config.retry_max_attempts

    @property
    def retry_backoff_ms(self) -> int:
        return self._config.retry_backoff_ms

    def reload_from_env(self, environ: Optional[Mapping[str, str]] = None) -> ClientConfig:
        """Re-read the environment and rebuild the HTTP client and retry policy.

        Values set explicitly when the client was built still take precedence.
        """
        config = ClientConfig.resolve(environ, **self._overrides)
        self._transport.close()
        self._configure(config)
        return config

    def set_transport(self, transport: httpx.BaseTransport) -> None:
        """Swap the underlying httpx transport. For tests only."""
        self._injected_transport = transport
        self._transport.replace_transport(transport)

    def endpoint(self) -> str:
        return build_endpoint(self._config)

    def execute(self, payload: Payload) -> httpx.Response:
        """POST ``payload`` once, without retries."""
        return self._transport.execute(self.endpoint(), PDPTransport.serialize(payload))

    def send(self, payload: Payload) -> httpx.Response:
        """POST ``payload`` under the retry policy and return the raw response.

        The status code is not inspected; a 4xx/5xx answer is returned as is.
        """
        return self._transport.send(self.endpoint(), payload)

    def get_json_response(self, payload: Payload) -> JsonValue:
        return decode_as_tree(self.send(payload).content)

    def get_mapped_response(self, payload: Payload) -> Dict[str, JsonValue]:
        return decode_as_map(self.send(payload).content)

    def close(self) -> None:
        self._transport.close()


class PDPClientBuilder(ClientConfigBuilder):
    def __init__(self) -> None:
        super().__init__()
        self._transport: Optional[httpx.BaseTransport] = None
        self._sleep: Callable[[float], None] = time.sleep

    def transport(self, transport: httpx.BaseTransport) -> "PDPClientBuilder":
        self._transport = transport
        return self

    def sleep(self, sleep: Callable[[float], None]) -> "PDPClientBuilder":
        self._sleep = sleep
        return self

    def build(self, environ: Optional[Mapping[str, str]] = None) -> PDPClient:
        return PDPClient(
            self.build_config(environ),
            transport=self._transport,
            sleep=self._sleep,
            overrides=self.overrides(),
        )


__all__ = ["PDPClient", "PDPClientBuilder"]
