"""Tests for pipe composition, watch helpers and settings."""

from __future__ import annotations

import asyncio
import io
import logging

import pytest
from pydantic import ValidationError

from safechain import (
    Chain,
    ChainError,
    SafechainSettings,
    configure_logging,
    fail,
    from_thunk,
    from_value,
    get_settings,
    normalize_error,
    pipe,
    watch_error,
    watch_log,
    watch_ok,
)
from safechain.foundation.config import settings_or_defaults

# ═════════════════════════════════════════════════════════════════════════════
# pipe
# ═════════════════════════════════════════════════════════════════════════════


def test_pipe_single_step() -> None:
    assert pipe(lambda x: x + 1)(5).unwrap() == 6


def test_pipe_steps_run_left_to_right() -> None:
    piped = pipe(str.strip, int, lambda n: n * 2, str)
    assert piped(" 21 ").unwrap() == "42"


def test_pipe_without_steps_is_from_value() -> None:
    assert pipe()(7).unwrap() == 7


def test_pipe_short_circuits() -> None:
    calls: list[int] = []
    piped = pipe(int, lambda n: calls.append(n) or n)
    chain = piped("not a number")

    assert chain.is_ok is False
    assert calls == []
    with pytest.raises(ValueError):
        chain.unwrap()


def test_pipe_is_reusable() -> None:
    double = pipe(lambda x: x * 2)
    assert [double(n).unwrap() for n in range(3)] == [0, 2, 4]


@pytest.mark.asyncio
async def test_pipe_with_async_step() -> None:
    async def fetch(n: int) -> int:
        await asyncio.sleep(0)
        return n * 10

    piped = pipe(lambda x: x + 1, fetch, lambda x: x - 1)
    chain = piped(1)

    assert chain.pending
    assert await chain.unwrap() == 19


# ═════════════════════════════════════════════════════════════════════════════
# watch helpers
# ═════════════════════════════════════════════════════════════════════════════


def test_watch_ok_only_on_success() -> None:
    seen: list[object] = []

    from_value(3).watch(watch_ok(seen.append))
    from_thunk(lambda: 1 / 0).watch(watch_ok(seen.append))

    assert seen == [3]


def test_watch_error_only_on_failure() -> None:
    seen: list[BaseException] = []

    from_value(3).watch(watch_error(seen.append))
    Chain(fail("broken")).watch(watch_error(seen.append))

    assert len(seen) == 1
    assert isinstance(seen[0], ChainError)
    assert str(seen[0]) == "broken"


def test_watch_helpers_do_not_affect_chain() -> None:
    def explode(_: object) -> None:
        raise RuntimeError("observer bug")

    assert from_value(1).watch(watch_ok(explode)).unwrap() == 1
    assert Chain(fail("x")).watch(watch_error(explode)).or_else(0) == 0


def test_watch_log(caplog: pytest.LogCaptureFixture) -> None:
    logger = logging.getLogger("tests.orders")

    with caplog.at_level(logging.DEBUG, logger="tests.orders"):
        from_value(5).watch(watch_log(logger, event="order"))
        from_thunk(lambda: int("x")).watch(watch_log(logger, event="order"))

    levels = [(r.levelno, r.getMessage()) for r in caplog.records if r.name == "tests.orders"]
    assert levels[0] == (logging.DEBUG, "order ok: 5")
    assert levels[1][0] == logging.WARNING
    assert levels[1][1].startswith("order failed: ValueError:")


def test_swallowed_consumer_error_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    def explode(_: object) -> None:
        raise RuntimeError("observer bug")

    with caplog.at_level(logging.DEBUG, logger="safechain.chain"):
        from_value(1).watch(explode)

    assert any("observer bug" in r.getMessage() for r in caplog.records if r.name == "safechain.chain")


def test_swallowed_consumer_error_logging_can_be_disabled(
    caplog: pytest.LogCaptureFixture, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("SAFECHAIN_LOG_SUPPRESSED", "false")

    with caplog.at_level(logging.DEBUG, logger="safechain.chain"):
        from_value(1).watch(lambda _: 1 / 0)

    assert not [r for r in caplog.records if r.name == "safechain.chain"]


# ═════════════════════════════════════════════════════════════════════════════
# Settings
# ═════════════════════════════════════════════════════════════════════════════


def test_settings_defaults() -> None:
    settings = SafechainSettings()

    assert settings.debug is False
    assert settings.log_level == "WARNING"
    assert settings.log_suppressed is True
    assert settings.error_max_message == 2000
    assert settings.effective_level == logging.WARNING


def test_settings_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SAFECHAIN_LOG_LEVEL", "debug")
    monkeypatch.setenv("SAFECHAIN_DEBUG", "true")

    settings = get_settings()

    assert settings.log_level == "DEBUG"
    assert settings.effective_level == logging.DEBUG
    assert get_settings() is settings


def test_opaque_message_is_capped(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SAFECHAIN_ERROR_MAX_MESSAGE", "10")

    error = normalize_error({"key": "a" * 50})

    assert isinstance(error, ChainError)
    assert error.message == '{"key":"aa...'


def test_invalid_env_does_not_break_watch_isolation(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SAFECHAIN_LOG_SUPPRESSED", "notabool")

    def explode(_: object) -> None:
        raise RuntimeError("observer bug")

    chain = from_value(1).watch(explode)

    assert chain.is_ok is True
    assert chain.unwrap() == 1


def test_invalid_env_does_not_break_normalization(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SAFECHAIN_ERROR_MAX_MESSAGE", "-1")

    error = normalize_error({"a": 1})

    assert isinstance(error, ChainError)
    assert error.message == '{"a":1}'
    assert fail({"a": 1}).is_ok is False


def test_settings_or_defaults_falls_back(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SAFECHAIN_ERROR_MAX_MESSAGE", "-1")

    with pytest.raises(ValidationError):
        get_settings()
    settings = settings_or_defaults()

    assert settings.error_max_message == 2000
    assert settings.log_suppressed is True


def test_configure_logging_installs_one_handler(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SAFECHAIN_LOG_LEVEL", "INFO")
    stream = io.StringIO()

    configure_logging()
    root = configure_logging(stream)

    owned = [h for h in root.handlers if getattr(h, "_safechain", False)]
    assert len(owned) == 1
    assert root.level == logging.INFO

    logging.getLogger("safechain.test").info("hello")
    assert "hello" in stream.getvalue()

    root.removeHandler(owned[0])
    root.setLevel(logging.NOTSET)
