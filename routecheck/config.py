# routecheck/config.py
from dataclasses import dataclass
from ipaddress import AddressValueError, IPv4Address
from typing import Optional

from routecheck.brain.state import NetworkNode


DEFAULT_MAX_HOPS = 30
DEFAULT_TIMEOUT_MS = 10000

# IPv4 TTL is a single octet
MIN_TTL = 1
MAX_TTL = 255


@dataclass(frozen=True)
class Settings:
    destination: NetworkNode
    gateways: tuple[NetworkNode, ...] = ()
    max_hops: int = DEFAULT_MAX_HOPS
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    verbose: bool = False


def parse_node(literal: str) -> Optional[NetworkNode]:
    """Parse a dotted-quad IPv4 literal into a NetworkNode, or None if it isn't one."""
    try:
        address = IPv4Address(literal)
    except AddressValueError:
        return None
    return NetworkNode(identifier=literal, address=address)


def parse_int(text: str) -> int:
    """
    Lenient integer parse: optional sign followed by leading digits, anything
    else is ignored. Text with no leading number yields 0.
    """
    text = text.strip()
    sign = 1
    if text[:1] in ("+", "-"):
        sign = -1 if text[0] == "-" else 1
        text = text[1:]
    digits = ""
    for ch in text:
        if not ch.isdigit():
            break
        digits += ch
    return sign * int(digits) if digits else 0


def clamp_ttl(ttl: int) -> int:
    return max(MIN_TTL, min(ttl, MAX_TTL))
