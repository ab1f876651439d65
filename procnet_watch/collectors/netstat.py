from __future__ import annotations
import logging
import re
import subprocess
from typing import Iterable, List, Optional

from ..models import ConnectionRecord, Protocol, State
from ..utils.net import format_endpoint, split_endpoint, split_remote

log = logging.getLogger(__name__)

MAX_PID = 0xFFFFFFFF

_PROTOCOLS = "|".join(p.value for p in Protocol)
_STATES = "|".join(s.value for s in State if s is not State.NOT_APPLICABLE)

# Proto  Local  Foreign  [State]  PID  [anything]; columns never span lines
_WS = r"[^\S\n]"
NETSTAT_RE = re.compile(
    rf"^{_WS}*(?P<proto>{_PROTOCOLS}){_WS}+"
    rf"(?P<local>[0-9A-Fa-f.:\[\]%]+){_WS}+"
    rf"(?P<remote>[0-9A-Fa-f.:\[\]%*]+){_WS}+"
    rf"(?:(?P<state>{_STATES}){_WS}+)?"
    rf"(?P<pid>\d+)(?:{_WS}.*)?$",
    re.MULTILINE)


class NetstatError(RuntimeError):
    pass


class ListingError(NetstatError):
    """The listing command could not be run or failed."""


class ParseError(NetstatError):
    """Listing text matched the grammar but carried an impossible value."""


def parse(text: str) -> List[ConnectionRecord]:
    records: List[ConnectionRecord] = []
    for m in NETSTAT_RE.finditer(text or ""):
        pid = int(m.group("pid"))
        if pid > MAX_PID:
            raise ParseError(f"pid out of range in line: {m.group(0).strip()!r}")
        try:
            local = split_endpoint(m.group("local"))
            remote = split_remote(m.group("remote"))
        except ValueError:
            continue
        state = m.group("state")
        records.append(ConnectionRecord(
            protocol=Protocol(m.group("proto")),
            local=local,
            remote=remote,
            state=State(state) if state else State.NOT_APPLICABLE,
            pid=pid,
        ))
    return records


def format_record(rec: ConnectionRecord) -> str:
    return "  {:<7}{:<24}{:<24}{:<16}{}".format(
        rec.protocol.value,
        format_endpoint(rec.local) + " ",
        format_endpoint(rec.remote) + " ",
        rec.state.value,
        rec.pid)


def run_netstat(protocol: Optional[Protocol] = None, all_states: bool = True,
                keywords: Optional[Iterable[str]] = None,
                netstat: str = "netstat", timeout: float = 60.0) -> str:
    """Run `netstat -no[a] [-p PROTO]` and return its output.

    With keywords, only lines carrying one of them as a whitespace separated
    token are kept (pids, mostly).
    """
    cmd = [netstat, "-noa" if all_states else "-no"]
    if protocol is not None:
        cmd += ["-p", protocol.value]
    try:
        out = subprocess.check_output(cmd, text=True, errors="replace",
                                      stderr=subprocess.DEVNULL, timeout=timeout)
    except (OSError, subprocess.SubprocessError) as e:
        raise ListingError(f"{' '.join(cmd)}: {e}") from e

    wanted = set(keywords or ())
    if wanted:
        out = "\n".join(line for line in out.splitlines() if wanted.intersection(line.split()))
    log.debug("netstat returned %d lines", out.count("\n") + 1 if out else 0)
    return out
