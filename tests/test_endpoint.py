from __future__ import annotations

import pytest

from pdp_client.config import ClientConfig
from pdp_client.endpoint import build_endpoint
from pdp_client.errors import MalformedEndpoint


@pytest.mark.parametrize(
    "config, expected",
    [
        (ClientConfig(), "http://localhost:8181/authz"),
        (ClientConfig(hostname="somehost"), "http://somehost:8181/authz"),
        (ClientConfig(hostname="http://somehost-with-http"), "http://somehost-with-http:8181/authz"),
        (ClientConfig(hostname="https://somehost-with-https"), "https://somehost-with-https:8181/authz"),
        (ClientConfig(port=8182), "http://localhost:8182/authz"),
        (ClientConfig(policy_path="/somepath"), "http://localhost:8181/somepath"),
        (
            ClientConfig(policy_path="somepath_without_leading_slash"),
            "http://localhost:8181/somepath_without_leading_slash",
        ),
        (ClientConfig(schema="https", hostname="pdp", policy_path="v1/data/authz"), "https://pdp:8181/v1/data/authz"),
    ],
)
def test_build_endpoint(config: ClientConfig, expected: str) -> None:
    assert build_endpoint(config) == expected


def test_hostname_schema_wins_over_configured_schema() -> None:
    config = ClientConfig(schema="http", hostname="https://x", port=8181, policy_path="/authz")

    assert build_endpoint(config) == "https://x:8181/authz"
    assert config.schema == "http"
    assert config.hostname == "https://x"


def test_build_endpoint_is_deterministic() -> None:
    config = ClientConfig(hostname="https://pdp.internal", port=9443, policy_path="a/b")

    assert build_endpoint(config) == build_endpoint(config)


def test_default_port_is_elided() -> None:
    assert build_endpoint(ClientConfig(hostname="https://pdp", port=443)) == "https://pdp/authz"


@pytest.mark.parametrize("hostname", ["a://b://c", "http://https://host"])
def test_multiple_schema_delimiters_are_rejected(hostname: str) -> None:
    with pytest.raises(MalformedEndpoint):
        build_endpoint(ClientConfig(hostname=hostname))


@pytest.mark.parametrize(
    "config",
    [
        ClientConfig(schema="ftp"),
        ClientConfig(hostname="gopher://host"),
        ClientConfig(hostname="http://"),
        ClientConfig(hostname=""),
    ],
)
def test_unusable_schema_or_host_is_rejected(config: ClientConfig) -> None:
    with pytest.raises(MalformedEndpoint):
        build_endpoint(config)
