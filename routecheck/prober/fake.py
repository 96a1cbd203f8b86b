# routecheck/prober/fake.py
from collections import deque
from ipaddress import IPv4Address

from routecheck.prober.base import Prober
from routecheck.schemas import EchoResult, timeout_result


class FakeProber(Prober):
    """
    script: dict[ttl] -> list of EchoResult-like dicts (or bare addresses) to return each call.
    If no scripted result is left, returns a timeout.
    """
    def __init__(self, script=None):
        self.script = {}
        self.calls = []
        self.closed = False
        if script:
            for k, v in script.items():
                self.script[k] = deque(v)

    def send_echo(self, destination: IPv4Address, ttl: int, timeout_ms: int) -> EchoResult:
        self.calls.append((destination, ttl, timeout_ms))
        dq = self.script.get(ttl)
        if dq:
            item = dq.popleft()
            if isinstance(item, dict):
                return item
            return {"succeeded": True, "responder_address": IPv4Address(item), "ttl": ttl, "icmp_type": 11}
        return timeout_result(ttl)

    def close(self):
        self.closed = True


class PathProber(FakeProber):
    """
    Simulated route: hops[i] answers TTL i+1 with time exceeded (None = silent hop),
    and the destination answers with an echo reply once the TTL covers the whole path.
    """
    def __init__(self, destination: str, hops, reachable: bool = True):
        super().__init__()
        self.destination = IPv4Address(destination)
        self.hops = [IPv4Address(h) if h else None for h in hops]
        self.reachable = reachable

    def send_echo(self, destination: IPv4Address, ttl: int, timeout_ms: int) -> EchoResult:
        self.calls.append((destination, ttl, timeout_ms))
        if ttl <= len(self.hops):
            hop = self.hops[ttl - 1]
            if hop is None:
                return timeout_result(ttl)
            return {"succeeded": True, "responder_address": hop, "ttl": ttl, "icmp_type": 11}
        if not self.reachable or destination != self.destination:
            return timeout_result(ttl)
        return {"succeeded": True, "responder_address": self.destination, "ttl": ttl, "icmp_type": 0}
