from __future__ import annotations
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Dict, List, Optional

from ..collectors.netstat import format_record, parse, run_netstat
from ..models import ConnectionRecord, LogicalTarget, Protocol, State

log = logging.getLogger(__name__)

# (protocol, all_states, keywords) -> raw listing text
Lister = Callable[..., str]


@dataclass
class Counts:
    listen: int = 0
    established: int = 0
    other: int = 0

    @classmethod
    def of(cls, records: List[ConnectionRecord]) -> "Counts":
        c = cls()
        for r in records:
            if r.state is State.LISTENING:
                c.listen += 1
            elif r.state is State.ESTABLISHED:
                c.established += 1
            else:
                c.other += 1
        return c

    def __str__(self):
        return f"Listen: {self.listen} Established: {self.established} Other: {self.other}"


@dataclass
class Group:
    target: LogicalTarget
    pid: int
    records: List[ConnectionRecord] = field(default_factory=list)

    @property
    def counts(self) -> Counts:
        return Counts.of(self.records)


@dataclass
class GroupedReport:
    taken_at: datetime
    groups: List[Group]
    totals: Counts

    def lines(self) -> List[str]:
        out = [f"{g.pid} {g.target.name}:\n\t{g.counts}" for g in self.groups]
        if len(self.groups) > 1:
            out.append(f"Total: {self.totals}")
        return out

    def to_dict(self) -> dict:
        d = {
            "taken_at": self.taken_at.isoformat(timespec="seconds"),
            "groups": [{**g.target.to_dict(), "pid": g.pid, **vars(g.counts)} for g in self.groups],
        }
        if len(self.groups) > 1:
            d["total"] = vars(self.totals)
        return d


def build_report(records: List[ConnectionRecord], lookup: Callable[[int], Optional[LogicalTarget]],
                 totals_over: Optional[List[ConnectionRecord]] = None) -> GroupedReport:
    by_pid: Dict[int, List[ConnectionRecord]] = {}
    for r in records:
        by_pid.setdefault(r.pid, []).append(r)
    groups: List[Group] = []
    for pid, recs in sorted(by_pid.items(), key=lambda kv: len(kv[1]), reverse=True):
        target = lookup(pid)
        if target is None:
            continue
        groups.append(Group(target=target, pid=pid, records=recs))
    if totals_over is None:
        totals_over = [r for g in groups for r in g.records]
    return GroupedReport(taken_at=datetime.now(), groups=groups, totals=Counts.of(totals_over))


class ObservationCycle:
    """One poll in unfiltered mode: list everything, then track what was seen."""

    def __init__(self, tracker, lister: Lister = run_netstat, snap=None):
        self.tracker = tracker
        self.lister = lister
        self.snap = snap

    def run_once(self) -> GroupedReport:
        records = parse(self.lister(Protocol.TCP, True, None))
        self.tracker.tick(r.pid for r in records)
        return self.publish(build_report(records, self.tracker.lookup, totals_over=records))

    def publish(self, report: GroupedReport) -> GroupedReport:
        log.info("\n%s\n", report.taken_at.strftime("%H:%M:%S\t(%d/%m)"))
        for g in report.groups:
            if log.isEnabledFor(logging.DEBUG):
                log.debug("%s", "\n".join(f"{format_record(r)}  {g.target.short_name}" for r in g.records))
            log.info("%d %s:\n\t%s", g.pid, g.target.name, g.counts)
        if len(report.groups) > 1:
            log.info("Total: %s", report.totals)
        if self.snap is not None:
            self.snap.update(report, self.tracker.targets)
        return report


class NamedObservationCycle(ObservationCycle):
    """One poll in named mode: refresh target pids, then list only their sockets."""

    def run_once(self) -> GroupedReport:
        self.tracker.tick()
        pids = self.tracker.bound_pids()
        records: List[ConnectionRecord] = []
        if pids:
            text = self.lister(Protocol.TCP, True, [str(p) for p in pids])
            wanted = set(pids)
            records = [r for r in parse(text) if r.pid in wanted]
        return self.publish(build_report(records, self.tracker.lookup))


def make_cycle(tracker, lister: Lister = run_netstat, snap=None) -> ObservationCycle:
    cls = NamedObservationCycle if tracker.filtered else ObservationCycle
    return cls(tracker, lister=lister, snap=snap)
