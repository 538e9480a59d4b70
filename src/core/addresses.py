from __future__ import annotations

import ipaddress
from typing import Hashable, Optional, Union

from core.errors import ValidationError

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]


def parse_address(raw: str) -> IPAddress:
    # Accept "127.0.0.1", "::1" and bracketed IPv6 like "[::1]"
    s = (raw or "").strip()
    if s.startswith("[") and s.endswith("]"):
        s = s[1:-1].strip()
    if not s:
        raise ValidationError("Missing address")
    try:
        return ipaddress.ip_address(s)
    except ValueError as e:
        raise ValidationError(f"Invalid IP address: {raw!r}") from e


def format_address(address: Optional[Hashable]) -> Optional[str]:
    if address is None:
        return None
    return str(address)
