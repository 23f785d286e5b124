from __future__ import annotations

from typing import Any, Callable, Dict, List, Tuple

import pytest

from pdp_client.config import ClientConfig
from pdp_client.errors import RetryExhausted, TransportFailure
from pdp_client.retry import RetryPolicy


def scripted(outcomes: List[Any]) -> Tuple[Callable[[], Any], Dict[str, int]]:
    calls = {"count": 0}

    def fn() -> Any:
        outcome = outcomes[calls["count"]]
        calls["count"] += 1
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    return fn, calls


def test_from_config_derives_bounds() -> None:
    policy = RetryPolicy.from_config(ClientConfig(retry_max_attempts=3, retry_backoff_ms=100))

    assert policy.max_attempts == 3
    assert policy.backoff == pytest.approx(0.1)
    assert policy.max_backoff == pytest.approx(0.301)


def test_delays_grow_and_stay_under_ceiling() -> None:
    policy = RetryPolicy.from_config(ClientConfig(retry_max_attempts=6, retry_backoff_ms=250))

    delays = list(policy.delays())

    assert len(delays) == 5
    assert delays[0] == pytest.approx(0.25)
    assert delays == sorted(delays)
    assert all(delay <= policy.max_backoff for delay in delays)
    assert delays[-1] == pytest.approx(policy.max_backoff)


def test_single_attempt_has_no_delays() -> None:
    assert list(RetryPolicy(max_attempts=1).delays()) == []


def test_success_on_first_attempt(sleeps: List[float]) -> None:
    fn, calls = scripted(["ok"])
    policy = RetryPolicy(max_attempts=2, sleep=sleeps.append)

    assert policy.call(fn) == "ok"
    assert calls["count"] == 1
    assert sleeps == []


def test_retries_transport_failure_then_succeeds(sleeps: List[float]) -> None:
    fn, calls = scripted([TransportFailure("refused"), "ok"])
    policy = RetryPolicy(max_attempts=2, backoff=0.05, max_backoff=0.101, sleep=sleeps.append)

    assert policy.call(fn) == "ok"
    assert calls["count"] == 2
    assert sleeps == [pytest.approx(0.05)]


def test_exhaustion_wraps_last_error(sleeps: List[float]) -> None:
    last = TransportFailure("second")
    fn, calls = scripted([TransportFailure("first"), last])
    policy = RetryPolicy(max_attempts=2, sleep=sleeps.append)

    with pytest.raises(RetryExhausted) as excinfo:
        policy.call(fn)

    assert calls["count"] == 2
    assert excinfo.value.attempts == 2
    assert excinfo.value.last_error is last
    assert excinfo.value.__cause__ is last
    assert len(sleeps) == 1


def test_non_retryable_errors_propagate_immediately(sleeps: List[float]) -> None:
    fn, calls = scripted([KeyError("boom"), "ok"])
    policy = RetryPolicy(max_attempts=3, sleep=sleeps.append)

    with pytest.raises(KeyError):
        policy.call(fn)

    assert calls["count"] == 1
    assert sleeps == []


def test_custom_retryable_exceptions(sleeps: List[float]) -> None:
    fn, calls = scripted([TimeoutError(), TimeoutError(), "ok"])
    policy = RetryPolicy(max_attempts=3, retry_on=(TimeoutError,), sleep=sleeps.append)

    assert policy.call(fn) == "ok"
    assert calls["count"] == 3
    assert len(sleeps) == 2


def test_invalid_policy_rejected() -> None:
    with pytest.raises(ValueError):
        RetryPolicy(max_attempts=0)


def test_many_attempts_do_not_overflow_backoff(sleeps: List[float]) -> None:
    policy = RetryPolicy.from_config(
        ClientConfig(retry_max_attempts=1100, retry_backoff_ms=0), sleep=sleeps.append
    )
    fn, calls = scripted([TransportFailure("down")] * 1100)

    with pytest.raises(RetryExhausted) as excinfo:
        policy.call(fn)

    assert calls["count"] == 1100
    assert excinfo.value.attempts == 1100
    assert len(sleeps) == 1099
    assert set(sleeps) == {0.0}


def test_long_delay_schedule_reaches_ceiling() -> None:
    policy = RetryPolicy.from_config(ClientConfig(retry_max_attempts=1100, retry_backoff_ms=250))

    delays = list(policy.delays())

    assert len(delays) == 1099
    assert delays[0] == pytest.approx(0.25)
    assert delays[-1] == pytest.approx(policy.max_backoff)
