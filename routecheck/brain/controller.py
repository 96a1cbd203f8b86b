# routecheck/brain/controller.py

import logging

from routecheck.brain.matcher import GatewayMatcher
from routecheck.brain.state import RunState
from routecheck.config import clamp_ttl

log = logging.getLogger(__name__)


class RouteChecker:
    def __init__(self, prober, settings):
        self.prober = prober
        self.s = settings

    def _probe(self, run: RunState, ttl: int):
        ev = self.prober.send_echo(run.destination.address, ttl, self.s.timeout_ms)
        run.probes_sent += 1
        if ev.get("succeeded") and ev.get("responder_address") is not None:
            run.hops[ttl] = ev["responder_address"]
        return ev

    def _record_matches(self, matcher: GatewayMatcher, ev, ttl: int):
        for gw in matcher.observe(ev.get("responder_address")):
            log.debug("Gateway %s replied at hop %d", gw.identifier, ttl)

    def run(self) -> RunState:
        dest = self.s.destination
        run = RunState(destination=dest, gateways=list(self.s.gateways))
        matcher = GatewayMatcher(run.gateways)

        # -------------------------------
        # 1) Reachability check
        # -------------------------------
        reach_ttl = clamp_ttl(self.s.max_hops)
        ev = self._probe(run, reach_ttl)
        if not ev.get("succeeded"):
            log.debug("Destination %s did not reply within %dms", dest.identifier, self.s.timeout_ms)
            run.stop_reason = "dest_unreachable"
            return run

        log.debug("Destination %s replied", dest.identifier)
        dest.mark_replied()
        # the full-route reply can itself be one of the gateways
        self._record_matches(matcher, ev, reach_ttl)

        if not run.gateways:
            run.stop_reason = "no_gateways"
            return run

        # -------------------------------
        # 2) Hop sweep, strictly in TTL order, below the reachability TTL
        # -------------------------------
        for ttl in range(1, reach_ttl):
            ev = self._probe(run, ttl)
            if ev.get("succeeded"):
                self._record_matches(matcher, ev, ttl)

        run.stop_reason = "sweep_complete"
        return run
