"""Service lifecycle: configuration, logging and graceful shutdown.

Typical use::

    svc = Service("cool", log_level="INFO")
    svc.parse_command_line(cfg)
    server = start_server(cfg)
    svc.register("http server", server.shutdown)
    svc.run()  # blocks until SIGINT/SIGTERM, then runs closers

Closers run newest first.  Each receives the number of seconds left in
the shutdown grace period; a failing closer is logged and the next one
still runs.
"""

from __future__ import annotations

import signal
import sys
import threading
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from types import FrameType
from typing import Any, NoReturn, TextIO

from bee.cli import exit_codes
from bee.cli.command_line import CommandLine
from bee.cli.console import get_console
from bee.cli.policy import ErrorHandling
from bee.core.protocols import EnvLookup
from bee.exceptions import BeeError
from bee.runtime.logging import new_logger

DEFAULT_SHUTDOWN_GRACE_PERIOD: float = 5.0
"""Seconds granted to all closers together."""

STOP_SIGNALS: tuple[signal.Signals, ...] = (signal.SIGINT, signal.SIGTERM)

Closer = Callable[[float], Any]
"""Shutdown callback receiving the remaining grace period in seconds."""


@dataclass(frozen=True, slots=True)
class _Closer:
    name: str
    inner: Closer


class Service:
    """A long-running process with configuration and graceful shutdown.

    Signal handlers for SIGINT and SIGTERM are installed on construction
    (main thread only) and restored once :meth:`run` returns from
    waiting.
    """

    def __init__(
        self,
        name: str,
        *,
        shutdown_grace_period: float = DEFAULT_SHUTDOWN_GRACE_PERIOD,
        log_level: str = "DEBUG",
        log_stream: TextIO | None = None,
        output: TextIO | None = None,
        lookup_env: EnvLookup | None = None,
        error_handling: ErrorHandling = ErrorHandling.EXIT,
        parent_command: str | None = None,
    ) -> None:
        self.name: str = name
        self.timeout: float = shutdown_grace_period
        self.command_line = CommandLine(
            name,
            output=output,
            lookup_env=lookup_env,
            error_handling=error_handling,
            parent_command=parent_command,
        )
        self.log = new_logger(log_level, log_stream)
        self._closers: list[_Closer] = []
        self._stop = threading.Event()
        self._signal: int | None = None
        self._previous: dict[int, Any] = {}
        self._install_signal_handlers()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def parse_command_line(
        self,
        config: object,
        argv: Sequence[str] | None = None,
    ) -> BeeError | None:
        """Resolve *config* from argv, environment and declared defaults."""
        return self.command_line.parse(config, argv)

    def register(self, name: str, closer: Closer) -> None:
        """Register *closer* to run on graceful shutdown."""
        self._closers.append(_Closer(name=name, inner=closer))

    def stop(self) -> None:
        """Ask :meth:`run` to begin shutting down."""
        self._stop.set()

    def run(self) -> None:
        """Block until stopped, then run closers in reverse order."""
        while self._signal is None and not self._stop.wait(0.1):
            continue
        self._restore_signal_handlers()

        deadline = time.monotonic() + self.timeout
        self.log.info("graceful shutdown", grace_period=self.timeout)

        for closer in reversed(self._closers):
            self.log.debug("closing " + closer.name)
            remaining = max(0.0, deadline - time.monotonic())
            try:
                closer.inner(remaining)
            except Exception as exc:  # noqa: BLE001
                self.log.warning("closer " + closer.name, error=str(exc))

    # ------------------------------------------------------------------
    # Signals
    # ------------------------------------------------------------------

    def _handle_signal(self, signum: int, _frame: FrameType | None) -> None:
        # Plain assignment only; run() polls this attribute.
        self._signal = signum

    def _install_signal_handlers(self) -> None:
        if threading.current_thread() is not threading.main_thread():
            return
        for sig in STOP_SIGNALS:
            self._previous[sig] = signal.signal(sig, self._handle_signal)

    def _restore_signal_handlers(self) -> None:
        for sig, handler in self._previous.items():
            signal.signal(sig, handler)
        self._previous.clear()


def exit_with(message: str, err: BaseException | None = None) -> NoReturn:
    """Print *message* (and *err*) to stderr and exit with the usage code."""
    console = get_console(sys.stderr)
    if err is None:
        console.print(message, markup=False)
    else:
        console.print(f"{message}: {err}", markup=False)
    sys.exit(exit_codes.USAGE_ERROR)
