from __future__ import annotations
import logging
import os
import re
import subprocess
from typing import Dict, Optional

log = logging.getLogger(__name__)

DEFAULT_APPCMD = os.path.join(os.environ.get('windir', r'C:\Windows'), 'system32', 'inetsrv', 'appcmd.exe')

# WP "4312" (applicationPool:DefaultAppPool)
WP_RE = re.compile(r'^WP\s+"(?P<pid>\d+)"\s+\(applicationPool:(?P<pool>[^)]+)\)', re.MULTILINE)


def parse_worker_processes(text: str) -> Dict[str, int]:
    pools: Dict[str, int] = {}
    for m in WP_RE.finditer(text or ''):
        pools.setdefault(m.group('pool'), int(m.group('pid')))
    return pools


class WorkerProcessRegistry:
    """IIS worker processes by application pool name, via `appcmd list wp`."""

    def __init__(self, appcmd: str = DEFAULT_APPCMD, timeout: float = 30.0):
        self.appcmd = appcmd
        self.timeout = timeout

    def list_pools(self) -> Dict[str, int]:
        try:
            out = subprocess.check_output([self.appcmd, 'list', 'wp'], text=True, errors='replace',
                                          stderr=subprocess.DEVNULL, timeout=self.timeout)
        except (OSError, subprocess.TimeoutExpired) as e:
            # no usable appcmd means no worker process is known
            log.debug("appcmd not usable at %s: %s", self.appcmd, e)
            return {}
        except subprocess.CalledProcessError as e:
            # appcmd exits non-zero when no worker process is running
            log.debug("appcmd list wp exited with %s", e.returncode)
            return {}
        return parse_worker_processes(out)

    def find_pid(self, pool: str) -> Optional[int]:
        return self.list_pools().get(pool)
