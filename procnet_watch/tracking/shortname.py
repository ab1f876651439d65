from __future__ import annotations
import re

from ..models import HostingKind

VOWELS = "aeiou"
SERVER_HOST_RE = re.compile(r"(srvr|hst)\.?", re.IGNORECASE)
SERVICE_RE = re.compile(r"srvc", re.IGNORECASE)
LEADING_DIGITS_RE = re.compile(r"^\.?\d+\.?")
LEADING_NONWORD_RE = re.compile(r"^\W+")
MIN_LENGTH = 8


def derive_short_name(name: str, hosting: HostingKind = HostingKind.UNKNOWN) -> str:
    """Compact label for dense report lines.

    Names shorter than MIN_LENGTH are returned as they are, hosting slot
    or not.
    """
    if len(name) < MIN_LENGTH:
        return name
    n = "".join(ch for ch in name if ch not in VOWELS)
    n = SERVER_HOST_RE.sub("", n).strip(".")
    n = SERVICE_RE.sub("svc", n).strip(".")
    n = LEADING_DIGITS_RE.sub("", n).strip(".")
    n = LEADING_NONWORD_RE.sub("", n).strip(".")
    return f"w3wp:{n}" if hosting is HostingKind.SLOT else n
