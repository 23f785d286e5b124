"""HTTP transport for PDP requests, governed by a RetryPolicy."""

from __future__ import annotations

import json
import logging
import time
from typing import Any, Callable, Mapping, Optional, Union

import httpx
from pydantic import BaseModel

from .config import ClientConfig
from .errors import MalformedResponse, RetryExhausted, TransportFailure
from .metrics import ATTEMPT_COUNTER, ATTEMPT_LATENCY, RETRIES_EXHAUSTED_COUNTER
from .retry import RetryPolicy

logger = logging.getLogger("pdp_client.transport")

JSON_CONTENT_TYPE = "application/json; charset=utf-8"

Payload = Union[BaseModel, Mapping[str, Any]]


class PDPTransport:
    def __init__(
        self,
        config: ClientConfig,
        *,
        transport: Optional[httpx.BaseTransport] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._config = config
        self._sleep = sleep
        self.retry_policy = RetryPolicy.from_config(config, sleep=sleep)
        self._client = self._build_client(transport)

    def __enter__(self) -> "PDPTransport":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _build_client(self, transport: Optional[httpx.BaseTransport]) -> httpx.Client:
        timeout = httpx.Timeout(self._config.read_timeout, connect=self._config.connect_timeout)
        if transport is None:
            # Connection retries happen in RetryPolicy only.
            transport = httpx.HTTPTransport(retries=0)
        return httpx.Client(timeout=timeout, transport=transport)

    def replace_transport(self, transport: httpx.BaseTransport) -> None:
        self._client.close()
        self._client = self._build_client(transport)

    @staticmethod
    def serialize(payload: Payload) -> bytes:
        if isinstance(payload, BaseModel):
            document = payload.model_dump(by_alias=True)
        else:
            document = dict(payload)
        return json.dumps(document, separators=(",", ":"), ensure_ascii=False).encode("utf-8")

    def execute(self, url: str, body: bytes) -> httpx.Response:
        """Make one POST attempt. Any HTTP status counts as success."""
        headers = {"Content-Type": JSON_CONTENT_TYPE, "Accept": "application/json"}
        logger.debug("POST %s (%s bytes)", url, len(body))
        start = time.perf_counter()
        try:
            with self._client.stream("POST", url, content=body, headers=headers) as response:
                response.read()
        except httpx.TransportError as exc:
            ATTEMPT_COUNTER.labels(outcome="transport_error").inc()
            raise TransportFailure(f"POST {url} failed: {exc!r}", url=url) from exc
        except httpx.DecodingError as exc:
            ATTEMPT_COUNTER.labels(outcome="decode_error").inc()
            raise MalformedResponse(f"PDP response from {url} could not be decoded: {exc}") from exc
        finally:
            ATTEMPT_LATENCY.observe(time.perf_counter() - start)
        ATTEMPT_COUNTER.labels(outcome="response").inc()
        logger.debug("POST %s -> %s", url, response.status_code)
        return response

    def send(self, url: str, payload: Payload) -> httpx.Response:
        body = self.serialize(payload)
        try:
            return self.retry_policy.call(lambda: self.execute(url, body))
        except RetryExhausted:
            RETRIES_EXHAUSTED_COUNTER.inc()
            raise

    def close(self) -> None:
        self._client.close()


__all__ = ["PDPTransport", "JSON_CONTENT_TYPE"]
