from __future__ import annotations

from pdp_client.models import (
    AuthorizationInput,
    AuthorizationRequest,
    ConnectionTuple,
    IncomingHttpRequest,
    Resources,
)


def test_empty_request_shape() -> None:
    payload = AuthorizationRequest().to_payload()

    assert payload == {
        "input": {
            "request": {"scheme": "", "method": "", "path": "", "query": {}, "headers": {}},
            "resources": {"requirements": [], "attributes": {}},
            "source": {"ipAddress": "", "port": 0},
            "destination": {"ipAddress": "", "port": 0},
        }
    }


def test_from_addresses() -> None:
    request = IncomingHttpRequest(method="POST", path="/v1/orders", headers={"authorization": "Bearer t"})
    resources = Resources(requirements=["orders:write"])

    payload = AuthorizationRequest(
        input=AuthorizationInput.from_addresses(request, resources, "10.1.1.1", "10.1.1.2")
    ).to_payload()

    assert payload["input"]["request"]["method"] == "POST"
    assert payload["input"]["source"] == {"ipAddress": "10.1.1.1", "port": 0}
    assert payload["input"]["destination"] == {"ipAddress": "10.1.1.2", "port": 0}


def test_connection_tuple_accepts_either_name() -> None:
    assert ConnectionTuple(ip_address="::1", port=80) == ConnectionTuple.model_validate({"ipAddress": "::1", "port": 80})
