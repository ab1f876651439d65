from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Iterable, List, Optional

import yaml

from .models import HostingKind, LogicalTarget

log = logging.getLogger(__name__)

PACKAGE_DIR = Path(__file__).parent.resolve()

HOSTING_ALIASES = {
    "slot": HostingKind.SLOT, "apppool": HostingKind.SLOT, "w3wp": HostingKind.SLOT,
    "direct": HostingKind.DIRECT, "process": HostingKind.DIRECT,
    "auto": HostingKind.UNKNOWN, "unknown": HostingKind.UNKNOWN,
}


def targets_from_names(names: Iterable[str]) -> List[LogicalTarget]:
    return [LogicalTarget(n) for n in names if n and n.strip()]


def _target_from_entry(entry) -> Optional[LogicalTarget]:
    if isinstance(entry, (str, int)):
        return LogicalTarget(str(entry))
    if not isinstance(entry, dict) or not entry.get("name"):
        log.warning("ignoring target entry %r", entry)
        return None
    kind = str(entry.get("hosting", "auto")).lower()
    if kind not in HOSTING_ALIASES:
        log.warning("unknown hosting kind %r for %s, using auto", kind, entry["name"])
    return LogicalTarget(str(entry["name"]), hosting=HOSTING_ALIASES.get(kind, HostingKind.UNKNOWN))


def _locate(path: str) -> Path:
    p = Path(path).expanduser()
    if p.is_absolute():
        return p.resolve()
    in_cwd = Path.cwd() / p
    if in_cwd.exists():
        return in_cwd.resolve()
    return (PACKAGE_DIR / p).resolve()


def load_targets(path: Optional[str]) -> List[LogicalTarget]:
    """Targets from a YAML (.yaml/.yml) or JSON list.

    Entries are plain names or {name: ..., hosting: slot|direct|auto}.
    Relative paths are looked up in the current directory, then next to
    the package.
    """
    if not path:
        return []
    p = _locate(path)
    if not p.exists():
        log.warning("targets file not found: %s", p)
        return []
    txt = p.read_text(encoding="utf-8")
    data = yaml.safe_load(txt) if p.suffix in (".yaml", ".yml") else json.loads(txt)
    if isinstance(data, dict):
        data = data.get("targets", [])
    targets = [t for t in (_target_from_entry(e) for e in (data or [])) if t is not None]
    log.info("loaded %d targets from %s", len(targets), p)
    return targets
