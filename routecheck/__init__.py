"""routecheck - check the route to a destination and report which gateways were encountered."""

__version__ = "0.1.0"
