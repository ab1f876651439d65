from __future__ import annotations
import logging
import os
import threading
from typing import Callable, Optional

log = logging.getLogger(__name__)


def exit_process(code: int) -> None:
    logging.shutdown()
    os._exit(code)


class Scheduler:
    """Runs cycle.run_once() on a worker thread, `interval` seconds after the
    previous run finished. Only one run is ever in flight.

    stop() keeps further runs from starting but lets a running one finish;
    calling it again does nothing. An exception from a run is logged and
    handed to on_fatal, which by default ends the process with status 1.
    """

    def __init__(self, cycle, interval: float, on_report: Optional[Callable] = None,
                 on_fatal: Callable[[int], None] = exit_process, delay: float = 0.0):
        self.cycle = cycle
        self.interval = interval
        self.on_report = on_report
        self.on_fatal = on_fatal
        self.delay = delay
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def stopped(self) -> bool:
        return self._stop.is_set()

    def start(self) -> "Scheduler":
        if self._thread is None and not self.stopped:
            self._thread = threading.Thread(target=self._run, name="procnet-watch", daemon=True)
            self._thread.start()
        return self

    def stop(self) -> None:
        self._stop.set()

    def join(self, timeout: Optional[float] = None) -> None:
        if self._thread is not None:
            self._thread.join(timeout)

    def is_alive(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def _run(self):
        if self._stop.wait(self.delay):
            return
        while not self.stopped:
            try:
                report = self.cycle.run_once()
                if self.on_report is not None:
                    self.on_report(report)
            except Exception:
                log.exception("observation cycle failed")
                self._stop.set()
                self.on_fatal(1)
                return
            # delay counts from the end of the run, not from its start
            if self._stop.wait(self.interval):
                return
