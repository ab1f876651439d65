from __future__ import annotations
import logging
import platform
from typing import List, Optional

import psutil

from ..models import ProcessEntry

log = logging.getLogger(__name__)

TERMINATED = "(terminated)"


def _norm(name: str) -> str:
    if platform.system() == 'Windows':
        name = name.lower()
        if name.endswith('.exe'):
            name = name[:-4]
    return name


class ProcessTable:
    """Live process table lookups; a missing process is a normal outcome."""

    def exists(self, pid: int) -> bool:
        if pid <= 0:
            return False
        return psutil.pid_exists(pid)

    def name_of(self, pid: int) -> Optional[str]:
        try:
            return psutil.Process(pid).name()
        except psutil.NoSuchProcess:
            return None
        except psutil.AccessDenied:
            return "?"

    def find_by_name(self, name: str) -> List[ProcessEntry]:
        # enumeration order of the platform; first match is best-effort only
        wanted = _norm(name)
        found: List[ProcessEntry] = []
        for p in psutil.process_iter(['pid', 'name']):
            pname = p.info.get('name') or ''
            if pname and _norm(pname) == wanted:
                found.append(ProcessEntry(pid=p.info['pid'], name=pname))
        return found
