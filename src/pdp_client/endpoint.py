"""Builds the Policy Decision Point URL from a resolved configuration."""

from __future__ import annotations

import httpx

from .config import ClientConfig
from .errors import MalformedEndpoint

SCHEMA_DELIMITER = "://"
SUPPORTED_SCHEMAS = ("http", "https")


def build_endpoint(config: ClientConfig) -> str:
    """Return the absolute URL requests are POSTed to.

    ``hostname`` may carry its own scheme (``"https://pdp.internal"``), in
    which case it wins over ``config.schema``. ``policy_path`` gets a leading
    slash when it lacks one. The config itself is never modified.
    """
    schema, hostname = config.schema, config.hostname

    parts = hostname.split(SCHEMA_DELIMITER)
    if len(parts) > 2:
        raise MalformedEndpoint(f"Invalid schema/hostname: {hostname}")
    if len(parts) == 2:
        schema, hostname = parts

    schema = schema.lower()
    if schema not in SUPPORTED_SCHEMAS:
        raise MalformedEndpoint(f"Unsupported schema {schema!r} (expected one of {', '.join(SUPPORTED_SCHEMAS)})")
    if not hostname:
        raise MalformedEndpoint(f"Missing hostname in {config.hostname!r}")

    policy_path = config.policy_path
    if not policy_path.startswith("/"):
        policy_path = f"/{policy_path}"

    try:
        url = httpx.URL(scheme=schema, host=hostname, port=config.port, path=policy_path)
    except httpx.InvalidURL as exc:
        raise MalformedEndpoint(f"Invalid PDP endpoint for hostname {config.hostname!r}: {exc}") from exc
    return str(url)


__all__ = ["build_endpoint", "SUPPORTED_SCHEMAS"]
