# routecheck/prober/icmp.py
import logging
import os
from ipaddress import IPv4Address

from scapy.config import conf
from scapy.error import Scapy_Exception
from scapy.layers.inet import ICMP, IP
from scapy.packet import Raw

from routecheck.exceptions import TransportInitError
from routecheck.prober.base import Prober
from routecheck.schemas import EchoResult, timeout_result

log = logging.getLogger(__name__)

ICMP_ECHO_REPLY = 0
ICMP_ECHO_REQUEST = 8
ICMP_TIME_EXCEEDED = 11

# minimal fixed payload
PAYLOAD = bytes([42])


class IcmpProber(Prober):
    """
    Sends ICMP echo requests with the don't-fragment bit set over a single
    scapy layer-3 socket that lives for the whole run. Needs raw socket
    privileges (root or CAP_NET_RAW).
    """

    def __init__(self, socket_factory=None):
        factory = socket_factory or conf.L3socket
        try:
            self.socket = factory()
        except (OSError, Scapy_Exception) as e:
            raise TransportInitError(f"could not open ICMP socket: {e}") from e
        self.ident = os.getpid() & 0xFFFF
        self.seq = 0

    def _build_request(self, destination: IPv4Address, ttl: int):
        self.seq = (self.seq + 1) & 0xFFFF
        return (IP(dst=str(destination), ttl=ttl, flags="DF")
                / ICMP(type=ICMP_ECHO_REQUEST, id=self.ident, seq=self.seq)
                / Raw(load=PAYLOAD))

    def send_echo(self, destination: IPv4Address, ttl: int, timeout_ms: int) -> EchoResult:
        pkt = self._build_request(destination, ttl)
        try:
            reply = self.socket.sr1(pkt, timeout=max(0, timeout_ms) / 1000.0, verbose=0)
        except OSError as e:
            log.debug("Probe to %s at ttl %d failed: %s", destination, ttl, e)
            return timeout_result(ttl)

        if reply is None or ICMP not in reply:
            return timeout_result(ttl)

        itype = reply[ICMP].type
        if itype not in (ICMP_ECHO_REPLY, ICMP_TIME_EXCEEDED):
            log.debug("Ignoring ICMP type %d from %s at ttl %d", itype, reply[IP].src, ttl)
            return timeout_result(ttl)

        return {
            "succeeded": True,
            "responder_address": IPv4Address(reply[IP].src),
            "ttl": ttl,
            "icmp_type": itype,
        }

    def close(self):
        if self.socket is not None:
            self.socket.close()
            self.socket = None
