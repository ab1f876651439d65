from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional

from .collectors.worker_registry import DEFAULT_APPCMD

DEFAULT_INTERVAL = 60.0
DEFAULT_PORT = 8765
LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


@dataclass
class CFG:
    names: List[str] = field(default_factory=list)
    targets_file: Optional[str] = None
    interval: float = DEFAULT_INTERVAL
    netstat: str = "netstat"
    appcmd: str = DEFAULT_APPCMD
    serve: bool = False
    port: int = DEFAULT_PORT
    verbose: bool = False

    @property
    def named_mode(self) -> bool:
        return bool(self.names or self.targets_file)


def init_cfg_from_args(args) -> CFG:
    cfg = CFG()
    cfg.names = [n for n in (getattr(args, "names", None) or []) if n.strip()]
    cfg.targets_file = getattr(args, "targets", None) or None
    interval = getattr(args, "interval", None)
    if interval is not None:
        if interval <= 0:
            raise ValueError(f"--interval must be positive, got {interval}")
        cfg.interval = float(interval)
    if getattr(args, "netstat", None):
        cfg.netstat = args.netstat
    if getattr(args, "appcmd", None):
        cfg.appcmd = args.appcmd
    cfg.serve = bool(getattr(args, "serve", False))
    if getattr(args, "port", None):
        cfg.port = int(args.port)
    cfg.verbose = bool(getattr(args, "verbose", False))
    return cfg
