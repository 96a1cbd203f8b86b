# routecheck/brain/matcher.py
from ipaddress import IPv4Address
from typing import Optional

from routecheck.brain.state import NetworkNode


class GatewayMatcher:
    def __init__(self, gateways: list[NetworkNode]):
        self.gateways = gateways

    def observe(self, address: Optional[IPv4Address]) -> list[NetworkNode]:
        """
        Mark every gateway whose address is exactly `address` as replied and
        return them. Duplicates are all marked; observing again is harmless.
        """
        if address is None:
            return []
        matched = [gw for gw in self.gateways if gw.address == address]
        for gw in matched:
            gw.mark_replied()
        return matched
