from ipaddress import IPv4Address
from typing import Optional, TypedDict


class EchoResult(TypedDict, total=False):
    succeeded: bool
    responder_address: Optional[IPv4Address]
    ttl: int
    icmp_type: Optional[int]    # 0 echo reply, 11 time exceeded, None on timeout


def timeout_result(ttl: int) -> EchoResult:
    return {"succeeded": False, "responder_address": None, "ttl": ttl, "icmp_type": None}
