# routecheck/brain/state.py
from dataclasses import dataclass, field
from ipaddress import IPv4Address


@dataclass
class NetworkNode:
    identifier: str
    address: IPv4Address
    replied: bool = False

    def mark_replied(self):
        # monotonic, never reset once set
        self.replied = True


@dataclass
class RunState:
    destination: NetworkNode
    gateways: list[NetworkNode]
    probes_sent: int = 0
    stop_reason: str | None = None
    # ttl -> responder address, only for hops that answered
    hops: dict = field(default_factory=dict)

    @property
    def dest_reached(self) -> bool:
        return self.destination.replied
