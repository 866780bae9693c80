"""Tests for the service lifecycle and structured logging."""

from __future__ import annotations

import io
import json
import signal
from collections.abc import Iterator
from dataclasses import dataclass

import pytest

from bee.cli.policy import ErrorHandling
from bee.core.models import setting
from bee.runtime.logging import level_number, new_logger
from bee.runtime.service import Service, exit_with
from conftest import EnvStub


@dataclass
class ServiceConfig:
    port: int = setting("3000")


def _lines(stream: io.StringIO) -> list[dict[str, object]]:
    return [json.loads(line) for line in stream.getvalue().splitlines() if line]


@pytest.fixture
def log_stream() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def service(log_stream: io.StringIO) -> Iterator[Service]:
    svc = Service(
        "cool",
        shutdown_grace_period=1.0,
        log_stream=log_stream,
        output=io.StringIO(),
        lookup_env=EnvStub({"COOL_PORT": "8080"}),
        error_handling=ErrorHandling.CONTINUE,
    )
    yield svc
    svc._restore_signal_handlers()


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

class TestLogging:
    @pytest.mark.parametrize(
        ("level", "number"),
        [("DEBUG", 10), ("info", 20), ("WARN", 30), ("warning", 30), ("ERROR", 40), ("LOUD", 10)],
    )
    def test_level_number(self, level: str, number: int) -> None:
        assert level_number(level) == number

    def test_json_lines(self) -> None:
        stream = io.StringIO()
        new_logger("DEBUG", stream).info("hello", port=3000)
        (entry,) = _lines(stream)
        assert entry["event"] == "hello"
        assert entry["level"] == "info"
        assert entry["port"] == 3000
        assert "timestamp" in entry

    def test_level_filtering(self) -> None:
        stream = io.StringIO()
        log = new_logger("WARN", stream)
        log.debug("quiet")
        log.info("quiet")
        log.warning("loud")
        log.error("louder")
        assert [entry["event"] for entry in _lines(stream)] == ["loud", "louder"]


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------

class TestService:
    def test_parse_command_line(self, service: Service) -> None:
        cfg = ServiceConfig()
        assert service.parse_command_line(cfg, []) is None
        assert cfg.port == 8080

    def test_closers_run_newest_first(self, service: Service, log_stream: io.StringIO) -> None:
        calls: list[tuple[str, float]] = []
        service.register("first", lambda timeout: calls.append(("first", timeout)))
        service.register("second", lambda timeout: calls.append(("second", timeout)))
        service.stop()
        service.run()

        assert [name for name, _ in calls] == ["second", "first"]
        assert all(0.0 <= timeout <= 1.0 for _, timeout in calls)

        events = [entry["event"] for entry in _lines(log_stream)]
        assert events == ["graceful shutdown", "closing second", "closing first"]

    def test_failing_closer_is_logged(self, service: Service, log_stream: io.StringIO) -> None:
        calls: list[str] = []

        def broken(timeout: float) -> None:
            raise RuntimeError("boom")

        service.register("db", lambda timeout: calls.append("db"))
        service.register("http", broken)
        service.stop()
        service.run()

        assert calls == ["db"]
        warnings = [entry for entry in _lines(log_stream) if entry["level"] == "warning"]
        assert len(warnings) == 1
        assert warnings[0]["event"] == "closer http"
        assert warnings[0]["error"] == "boom"

    def test_log_level_filters_debug(self) -> None:
        stream = io.StringIO()
        svc = Service("cool", log_level="INFO", log_stream=stream)
        try:
            svc.register("db", lambda timeout: None)
            svc.stop()
            svc.run()
        finally:
            svc._restore_signal_handlers()
        assert [entry["event"] for entry in _lines(stream)] == ["graceful shutdown"]

    def test_signal_stops_run(self, service: Service) -> None:
        assert signal.getsignal(signal.SIGTERM) == service._handle_signal
        signal.raise_signal(signal.SIGTERM)
        service.run()
        assert service._signal == signal.SIGTERM

    def test_handlers_restored_after_run(self) -> None:
        before = signal.getsignal(signal.SIGINT)
        svc = Service("cool", log_stream=io.StringIO())
        svc.stop()
        svc.run()
        assert signal.getsignal(signal.SIGINT) == before


# ---------------------------------------------------------------------------
# exit_with
# ---------------------------------------------------------------------------

class TestExitWith:
    def test_message_only(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            exit_with("cannot start")
        assert exc_info.value.code == 2
        assert "cannot start" in capsys.readouterr().err

    def test_with_error(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            exit_with("cannot listen", OSError("address in use [1]"))
        assert exc_info.value.code == 2
        assert "cannot listen: address in use [1]" in capsys.readouterr().err
