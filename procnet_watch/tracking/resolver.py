from __future__ import annotations
import logging
import re
from typing import Optional, Tuple

from ..models import HostingKind

log = logging.getLogger(__name__)

DIGITS_RE = re.compile(r"^\d+$")

Resolution = Tuple[int, HostingKind]


class IdentityResolver:
    """Maps a target descriptor to a live pid.

    `processes` needs exists(pid) and find_by_name(name), `registry`
    needs find_pid(pool). Returns None when nothing matches.
    """

    def __init__(self, processes, registry):
        self.processes = processes
        self.registry = registry

    def resolve(self, name: str, hosting: HostingKind = HostingKind.UNKNOWN) -> Optional[Resolution]:
        if DIGITS_RE.match(name):
            pid = int(name)
            return (pid, HostingKind.DIRECT) if self.processes.exists(pid) else None
        if hosting is HostingKind.SLOT:
            return self._by_slot(name)
        if hosting is HostingKind.DIRECT:
            return self._by_name(name)
        return self._by_name(name) or self._by_slot(name)

    def _by_name(self, name: str) -> Optional[Resolution]:
        found = self.processes.find_by_name(name)
        if not found:
            return None
        if len(found) > 1:
            log.warning("Processes found for name '%s': %s. Ignore all but first.",
                        name, ", ".join(str(p.pid) for p in found))
        return found[0].pid, HostingKind.DIRECT

    def _by_slot(self, name: str) -> Optional[Resolution]:
        pid = self.registry.find_pid(name)
        if pid is None:
            return None
        return pid, HostingKind.SLOT
