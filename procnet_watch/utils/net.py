from __future__ import annotations
import ipaddress
from typing import Optional

from ..models import Endpoint

WILDCARD = "*:*"


def split_endpoint(token: str) -> Endpoint:
    """Split 'addr:port' on the last colon.

    Handles '1.2.3.4:80', '[::1]:443' and '[fe80::1%4]:5353'. Raises
    ValueError for anything that is not an address plus a numeric port.
    """
    host, sep, port = token.rpartition(':')
    if not sep or not host:
        raise ValueError(f"not an endpoint: {token!r}")
    if host.startswith('[') and host.endswith(']'):
        host = host[1:-1]
    p = int(port)
    if not 0 <= p <= 0xFFFF:
        raise ValueError(f"port out of range: {token!r}")
    return ipaddress.ip_address(host), p


def split_remote(token: str) -> Optional[Endpoint]:
    if token == WILDCARD:
        return None
    return split_endpoint(token)


def format_endpoint(ep: Optional[Endpoint]) -> str:
    if ep is None:
        return WILDCARD
    addr, port = ep
    if addr.version == 6:
        return f"[{addr}]:{port}"
    return f"{addr}:{port}"
