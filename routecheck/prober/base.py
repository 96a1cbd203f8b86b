# routecheck/prober/base.py
from abc import ABC, abstractmethod
from ipaddress import IPv4Address

from routecheck.schemas import EchoResult


class Prober(ABC):
    """
    One ICMP session, reused for every probe of a run. Use it as a context
    manager so the session is released on every exit path.
    """

    @abstractmethod
    def send_echo(self, destination: IPv4Address, ttl: int, timeout_ms: int) -> EchoResult:
        """Send exactly one echo request to destination@ttl and wait for a reply or timeout."""
        raise NotImplementedError

    def close(self):
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False
