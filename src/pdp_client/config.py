"""Configuration objects for the PDP client."""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Mapping, Optional

from .errors import ConfigurationError

logger = logging.getLogger("pdp_client.config")

DEFAULT_SCHEMA = "http"
DEFAULT_HOSTNAME = "localhost"
DEFAULT_PORT = 8181
DEFAULT_POLICY_PATH = "/authz"
DEFAULT_CONNECT_TIMEOUT_MS = 5000
DEFAULT_READ_TIMEOUT_MS = 5000
DEFAULT_RETRY_MAX_ATTEMPTS = 2
DEFAULT_RETRY_BACKOFF_MS = 250

ENV_SCHEMA = "PDP_SCHEMA"
ENV_HOSTNAME = "PDP_HOSTNAME"
ENV_PORT = "PDP_PORT"
ENV_POLICY_PATH = "PDP_POLICY_PATH"
ENV_CONNECT_TIMEOUT_MS = "PDP_CONNECTION_TIMEOUT_MILLISECONDS"
ENV_READ_TIMEOUT_MS = "PDP_READ_TIMEOUT_MILLISECONDS"
ENV_RETRY_MAX_ATTEMPTS = "PDP_RETRY_MAX_ATTEMPTS"
ENV_RETRY_BACKOFF_MS = "PDP_RETRY_BACKOFF_MILLISECONDS"

# field name -> environment variable
ENV_VARS: Dict[str, str] = {
    "schema": ENV_SCHEMA,
    "hostname": ENV_HOSTNAME,
    "port": ENV_PORT,
    "policy_path": ENV_POLICY_PATH,
    "connect_timeout_ms": ENV_CONNECT_TIMEOUT_MS,
    "read_timeout_ms": ENV_READ_TIMEOUT_MS,
    "retry_max_attempts": ENV_RETRY_MAX_ATTEMPTS,
    "retry_backoff_ms": ENV_RETRY_BACKOFF_MS,
}

_INT_FIELDS = frozenset(
    {"port", "connect_timeout_ms", "read_timeout_ms", "retry_max_attempts", "retry_backoff_ms"}
)

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_INT_MIN, _INT_MAX = -(2 ** 31), 2 ** 31 - 1


def _parse_int(raw: str) -> Optional[int]:
    """Parse a signed 32-bit decimal; no whitespace, underscores or other digits."""
    if not _INT_PATTERN.fullmatch(raw):
        return None
    value = int(raw)
    if not _INT_MIN <= value <= _INT_MAX:
        return None
    return value


@dataclass(frozen=True)
class ClientConfig:
    schema: str = DEFAULT_SCHEMA
    hostname: str = DEFAULT_HOSTNAME
    port: int = DEFAULT_PORT
    policy_path: str = DEFAULT_POLICY_PATH
    connect_timeout_ms: int = DEFAULT_CONNECT_TIMEOUT_MS
    read_timeout_ms: int = DEFAULT_READ_TIMEOUT_MS
    retry_max_attempts: int = DEFAULT_RETRY_MAX_ATTEMPTS
    retry_backoff_ms: int = DEFAULT_RETRY_BACKOFF_MS

    def __post_init__(self) -> None:
        if not 0 <= self.port <= 65535:
            raise ConfigurationError(f"port must be between 0 and 65535, got {self.port}")
        if self.retry_max_attempts < 1:
            raise ConfigurationError(f"retry_max_attempts must be at least 1, got {self.retry_max_attempts}")
        for name in ("connect_timeout_ms", "read_timeout_ms", "retry_backoff_ms"):
            if getattr(self, name) < 0:
                raise ConfigurationError(f"{name} must not be negative, got {getattr(self, name)}")

    @property
    def connect_timeout(self) -> Optional[float]:
        """Seconds, or ``None`` for no timeout when set to 0."""
        return self.connect_timeout_ms / 1000.0 if self.connect_timeout_ms else None

    @property
    def read_timeout(self) -> Optional[float]:
        return self.read_timeout_ms / 1000.0 if self.read_timeout_ms else None

    @property
    def retry_backoff(self) -> float:
        return self.retry_backoff_ms / 1000.0

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        base: Optional["ClientConfig"] = None,
    ) -> "ClientConfig":
        """Layer the ``PDP_*`` environment variables over ``base``.

        Variables that are missing, cannot be parsed, or would produce an
        invalid configuration leave the value from ``base`` in place.
        """
        env = os.environ if environ is None else environ
        config = base if base is not None else cls()
        for name, var in ENV_VARS.items():
            raw = env.get(var)
            if raw is None:
                continue
            value: Any = raw
            if name in _INT_FIELDS:
                value = _parse_int(raw)
                if value is None:
                    logger.debug("Ignoring %s=%r: not an integer", var, raw)
                    continue
            try:
                config = replace(config, **{name: value})
            except ConfigurationError as exc:
                logger.debug("Ignoring %s=%r: %s", var, raw, exc)
        return config

    @classmethod
    def resolve(cls, environ: Optional[Mapping[str, str]] = None, **overrides: Any) -> "ClientConfig":
        """Resolve defaults, then environment, then explicit overrides.

        An override of ``None`` means "not set" and never replaces an
        environment value.
        """
        known = {f.name for f in fields(cls)}
        unknown = set(overrides) - known
        if unknown:
            raise ConfigurationError(f"unknown configuration field(s): {', '.join(sorted(unknown))}")
        explicit = {key: value for key, value in overrides.items() if value is not None}
        return replace(cls.from_env(environ), **explicit)


class ClientConfigBuilder:
    """Collects explicitly set values; everything else comes from the environment."""

    def __init__(self) -> None:
        self._values: Dict[str, Any] = {}

    def _set(self, name: str, value: Any) -> "ClientConfigBuilder":
        self._values[name] = value
        return self

    def schema(self, schema: str) -> "ClientConfigBuilder":
        return self._set("schema", schema)

    def hostname(self, hostname: str) -> "ClientConfigBuilder":
        return self._set("hostname", hostname)

    def port(self, port: int) -> "ClientConfigBuilder":
        return self._set("port", port)

    def policy_path(self, policy_path: str) -> "ClientConfigBuilder":
        return self._set("policy_path", policy_path)

    def connect_timeout_ms(self, timeout_ms: int) -> "ClientConfigBuilder":
        return self._set("connect_timeout_ms", timeout_ms)

    def read_timeout_ms(self, timeout_ms: int) -> "ClientConfigBuilder":
        return self._set("read_timeout_ms", timeout_ms)

    def retry_max_attempts(self, attempts: int) -> "ClientConfigBuilder":
        return self._set("retry_max_attempts", attempts)

    def retry_backoff_ms(self, backoff_ms: int) -> "ClientConfigBuilder":
        return self._set("retry_backoff_ms", backoff_ms)

    def overrides(self) -> Dict[str, Any]:
        return dict(self._values)

    def build_config(self, environ: Optional[Mapping[str, str]] = None) -> ClientConfig:
        return ClientConfig.resolve(environ, **self._values)

    def build(self, environ: Optional[Mapping[str, str]] = None) -> ClientConfig:
        return self.build_config(environ)


__all__ = ["ClientConfig", "ClientConfigBuilder", "ENV_VARS"]
