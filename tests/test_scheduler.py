import threading
import time

from procnet_watch.collectors.loop import Scheduler


class CountingCycle:

    def __init__(self, fail_on=None):
        self.runs = []
        self.fail_on = fail_on

    def run_once(self):
        start = time.monotonic()
        if self.fail_on is not None and len(self.runs) + 1 == self.fail_on:
            raise RuntimeError("listing broke")
        time.sleep(0.01)
        self.runs.append((start, time.monotonic()))
        return len(self.runs)


class BlockingCycle:

    def __init__(self):
        self.started = threading.Event()
        self.release = threading.Event()
        self.finished = 0

    def run_once(self):
        self.started.set()
        self.release.wait(5)
        self.finished += 1
        return "report"


def wait_for(predicate, timeout=5.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.005)
    return False


def test_runs_repeatedly_without_overlap():
    cycle, reports, fatal = CountingCycle(), [], []
    s = Scheduler(cycle, 0.01, on_report=reports.append, on_fatal=fatal.append).start()

    assert wait_for(lambda: len(reports) >= 3)
    s.stop()
    s.join(5)

    assert not s.is_alive()
    assert fatal == []
    for (_, prev_end), (next_start, _) in zip(cycle.runs, cycle.runs[1:]):
        assert next_start >= prev_end


def test_stop_before_first_run_produces_nothing():
    cycle, reports, fatal = CountingCycle(), [], []
    s = Scheduler(cycle, 0.01, on_report=reports.append, on_fatal=fatal.append)

    s.stop()
    s.start()
    s.join(1)

    assert cycle.runs == []
    assert reports == []
    assert fatal == []
    assert not s.is_alive()


def test_stop_during_initial_delay():
    cycle, fatal = CountingCycle(), []
    s = Scheduler(cycle, 0.01, on_fatal=fatal.append, delay=10).start()

    s.stop()
    s.join(5)

    assert not s.is_alive()
    assert cycle.runs == []
    assert fatal == []


def test_stop_is_idempotent():
    s = Scheduler(CountingCycle(), 0.01, on_fatal=lambda code: None).start()
    s.stop()
    s.stop()
    s.join(5)
    s.stop()
    assert s.stopped


def test_in_flight_run_finishes_after_stop():
    cycle, reports = BlockingCycle(), []
    s = Scheduler(cycle, 60, on_report=reports.append, on_fatal=lambda code: None).start()

    assert cycle.started.wait(5)
    s.stop()
    cycle.release.set()
    s.join(5)

    assert cycle.finished == 1
    assert reports == ["report"]
    assert not s.is_alive()


def test_failure_is_fatal_and_not_retried(caplog):
    cycle, reports, fatal = CountingCycle(fail_on=2), [], []
    s = Scheduler(cycle, 0.01, on_report=reports.append, on_fatal=fatal.append).start()

    s.join(5)

    assert fatal == [1]
    assert reports == [1]
    assert len(cycle.runs) == 1
    assert s.stopped
    assert "observation cycle failed" in caplog.text
    assert "listing broke" in caplog.text


def test_next_run_waits_for_interval():
    cycle, reports = CountingCycle(), []
    s = Scheduler(cycle, 60, on_report=reports.append, on_fatal=lambda code: None).start()

    assert wait_for(lambda: len(reports) == 1)
    time.sleep(0.1)
    s.stop()
    s.join(5)

    assert reports == [1]
