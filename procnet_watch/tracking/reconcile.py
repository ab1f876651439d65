from __future__ import annotations
import logging
from typing import Dict, Iterable, List, Optional

from ..collectors.process_table import TERMINATED
from ..models import Change, HostingKind, LogicalTarget

log = logging.getLogger(__name__)


class TargetTracker:
    """Keeps named targets bound to live pids across restarts.

    Targets are never dropped; a lost target goes back to pid 0 and is
    resolved again on the same and every following tick.
    """
    filtered = True

    def __init__(self, targets: Iterable[LogicalTarget], resolver, processes):
        self.targets: List[LogicalTarget] = list(targets)
        self.resolver = resolver
        self.processes = processes

    def tick(self) -> List[Change]:
        changes: List[Change] = []
        for t in self.targets:
            if t.pid and self.processes.exists(t.pid):
                continue
            old = t.pid
            found = self.resolver.resolve(t.name, t.hosting)
            if found:
                pid, hosting = found
                if t.hosting is HostingKind.UNKNOWN:
                    t.hosting = hosting
                t.pid = pid
                log.info("Process %s (old id: %d, new id: %d)", t.name, old, pid)
            elif old:
                t.pid = 0
                log.info("Process unknown: %s (old id: %d)", t.name, old)
            else:
                continue
            t.refresh_short_name()
            changes.append(Change(t.name, old, t.pid))

        if changes:
            log.info("%s", "\n".join(f"{t.name}:\t PID {t.pid}" for t in self.targets if t.bound))
        return changes

    def bound_pids(self) -> List[int]:
        return list(dict.fromkeys(t.pid for t in self.targets if t.bound))

    def lookup(self, pid: int) -> Optional[LogicalTarget]:
        if not pid:
            return None
        for t in self.targets:
            if t.pid == pid:
                return t
        return None


class DefaultTracker:
    """One direct target per pid seen in the latest snapshot.

    A recycled pid keeps the name it was first seen with.
    """
    filtered = False

    def __init__(self, processes):
        self.processes = processes
        self._by_pid: Dict[int, LogicalTarget] = {}

    @property
    def targets(self) -> List[LogicalTarget]:
        return list(self._by_pid.values())

    def tick(self, pids: Iterable[int]) -> List[Change]:
        current = list(dict.fromkeys(pids))
        seen = set(current)
        changes: List[Change] = []
        for pid in [p for p in self._by_pid if p not in seen]:
            t = self._by_pid.pop(pid)
            changes.append(Change(t.name, pid, 0))
        for pid in current:
            if pid in self._by_pid:
                continue
            name = self.processes.name_of(pid) or TERMINATED
            self._by_pid[pid] = LogicalTarget(name, pid, HostingKind.DIRECT)
            changes.append(Change(name, 0, pid))
        for c in changes:
            log.debug("pid %d -> %d: %s", c.old_pid, c.new_pid, c.name)
        return changes

    def lookup(self, pid: int) -> Optional[LogicalTarget]:
        return self._by_pid.get(pid)
