# tests/test_backoff.py

import httpx
import pytest

from common.config import Settings
from domain.errors import ApiError, InvalidArgumentError, RetryExhaustedError, TransportError
from infrastructure.backoff import BackoffPolicy, ExponentialBackoff, NoBackoff, is_retryable
from infrastructure.response_decoder import api_error_from


def flaky(failures, error_factory, result="ok"):
    calls = {"n": 0}

    async def operation():
        calls["n"] += 1
        if calls["n"] <= failures:
            raise error_factory()
        return result

    return operation, calls


def transport_error(cause):
    error = TransportError(f"request failed: {cause}")
    error.__cause__ = cause
    return error


@pytest.mark.parametrize(
    "exc, expected",
    [
        (ApiError("rate", status_code=429), True),
        (ApiError("quota", type="insufficient_quota", status_code=429), False),
        (ApiError("down", status_code=503), True),
        (ApiError("bad", status_code=400), False),
        (ApiError("in band"), False),
        (InvalidArgumentError("no"), False),
    ],
)
def test_is_retryable_classifies_api_errors(exc, expected):
    assert is_retryable(exc) is expected


def test_is_retryable_looks_at_transport_cause():
    assert is_retryable(transport_error(httpx.ConnectError("refused")))
    assert is_retryable(transport_error(httpx.ReadTimeout("slow")))
    assert not is_retryable(transport_error(httpx.UnsupportedProtocol("ftp")))


@pytest.mark.asyncio
@pytest.mark.parametrize("failures", [0, 1, 2])
async def test_retries_until_success(fast_backoff, sleep_recorder, failures):
    operation, calls = flaky(failures, lambda: ApiError("down", status_code=500))

    assert await fast_backoff.execute(operation) == "ok"
    assert calls["n"] == failures + 1
    assert len(sleep_recorder.delays) == failures


@pytest.mark.asyncio
async def test_exhausted_budget_wraps_last_error(fast_backoff):
    operation, calls = flaky(10, lambda: ApiError("down", status_code=502))

    with pytest.raises(RetryExhaustedError) as excinfo:
        await fast_backoff.execute(operation)

    assert calls["n"] == 3
    assert excinfo.value.attempts == 3
    assert excinfo.value.last_error.status_code == 502


@pytest.mark.asyncio
async def test_terminal_error_is_not_retried(fast_backoff, sleep_recorder):
    operation, calls = flaky(10, lambda: ApiError("bad request", status_code=400))

    with pytest.raises(ApiError):
        await fast_backoff.execute(operation)

    assert calls["n"] == 1
    assert sleep_recorder.delays == []


@pytest.mark.asyncio
async def test_insufficient_quota_is_terminal(fast_backoff):
    operation, calls = flaky(
        10, lambda: ApiError("quota", type="insufficient_quota", status_code=429)
    )

    with pytest.raises(ApiError):
        await fast_backoff.execute(operation)

    assert calls["n"] == 1


@pytest.mark.asyncio
async def test_retry_after_overrides_backoff_and_is_capped(fast_backoff, sleep_recorder):
    delays = iter([1.0, 60.0])
    operation, _ = flaky(2, lambda: ApiError("rate", status_code=429, retry_after=next(delays)))

    await fast_backoff.execute(operation)

    assert sleep_recorder.delays == [1.0, 5.0]


@pytest.mark.asyncio
async def test_elapsed_budget_stops_retries(sleep_recorder):
    backoff = ExponentialBackoff(BackoffPolicy(max_attempts=10, max_elapsed=0.0), sleep=sleep_recorder)
    operation, calls = flaky(10, lambda: ApiError("down", status_code=500))

    with pytest.raises(RetryExhaustedError):
        await backoff.execute(operation)

    assert calls["n"] == 1


@pytest.mark.asyncio
async def test_no_backoff_calls_once():
    operation, calls = flaky(1, lambda: ApiError("down", status_code=500))

    with pytest.raises(ApiError):
        await NoBackoff().execute(operation)

    assert calls["n"] == 1


def test_policy_from_settings(monkeypatch):
    monkeypatch.setenv("RETRY_MAX_ATTEMPTS", "7")
    policy = BackoffPolicy.from_settings(Settings(_env_file=None))
    assert policy.max_attempts == 7


@pytest.mark.asyncio
async def test_operation_returning_awaitable_is_awaited_and_retried(fast_backoff):
    operation, calls = flaky(1, lambda: ApiError("down", status_code=503))

    result = await fast_backoff.execute(lambda: operation())

    assert result == "ok"
    assert calls["n"] == 2


def test_insufficient_quota_with_integer_code_is_terminal():
    error = api_error_from(
        429, b'{"error": {"message": "quota", "type": "insufficient_quota", "code": 429}}'
    )

    assert error.type == "insufficient_quota"
    assert not is_retryable(error)
