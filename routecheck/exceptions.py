"""
exceptions.py

Exceptions used throughout routecheck.
"""


class TransportInitError(Exception):
    """Raised when the ICMP session cannot be created"""
    pass
