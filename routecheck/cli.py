# routecheck/cli.py
# Usage examples:
#   routecheck -d 8.8.8.8 -gw 10.0.0.1 -gw 10.0.1.1
#   python3 -m routecheck -v -d 8.8.8.8 -gw 10.0.0.1 -ttl 10 -timeout 2000

import argparse
import logging
import sys

from routecheck.brain.controller import RouteChecker
from routecheck.brain.report import build_report
from routecheck.config import DEFAULT_MAX_HOPS, DEFAULT_TIMEOUT_MS, Settings, parse_int, parse_node
from routecheck.exceptions import TransportInitError

log = logging.getLogger("routecheck")

EXIT_OK = 0
EXIT_NO_ARGS = 1
EXIT_NO_DESTINATION = 2
EXIT_ICMP_INIT = 3
EXIT_DEST_UNREACHABLE = 4


def build_argparser():
    ap = argparse.ArgumentParser(
        prog="routecheck",
        description="routecheck - check the route to a destination and report "
                    "which of the specified routes were encountered.",
        epilog="routecheck will return 0 on success and print a report to the screen",
        add_help=False,
        allow_abbrev=False,
    )
    ap.add_argument("-v", dest="verbose", action="store_true", help="Verbose output to screen")
    ap.add_argument("-h", "-help", dest="help", action="store_true", help="Print this help")
    ap.add_argument("-d", dest="destinations", action="append", default=[], metavar="IP",
                    help="Destination we are trying to examine")
    ap.add_argument("-gw", dest="gateways", action="append", default=[], metavar="IP",
                    help="Gateway or intermediate hop we are interested in")
    ap.add_argument("-ttl", dest="max_hops", metavar="hops",
                    help=f"Maximum hops to allow trace to run (default {DEFAULT_MAX_HOPS})")
    ap.add_argument("-timeout", dest="timeout", metavar="time",
                    help=f"Maximum time in milliseconds to wait for a reply (default {DEFAULT_TIMEOUT_MS:,})")
    return ap


_handler = None


def setup_logging(verbose: bool):
    # plain messages on stdout, alongside the report
    global _handler
    if _handler is not None:
        log.removeHandler(_handler)
    _handler = logging.StreamHandler(sys.stdout)
    _handler.setFormatter(logging.Formatter("%(message)s"))
    log.addHandler(_handler)
    log.setLevel(logging.DEBUG if verbose else logging.WARNING)
    log.propagate = False


def settings_from_args(args, ap=None):
    """Build Settings from parsed args; returns None when no valid destination was given."""
    destination = None
    for literal in args.destinations:
        log.debug("Destination: %s", literal)
        node = parse_node(literal)
        if node is None:
            log.debug("Destination address is invalid %s", literal)
            if args.verbose and ap is not None:
                ap.print_help(sys.stdout)
            continue
        destination = node

    gateways = []
    for literal in args.gateways:
        log.debug("Gateway: %s", literal)
        node = parse_node(literal)
        if node is None:
            log.debug("Gateway address is invalid %s", literal)
            if args.verbose and ap is not None:
                ap.print_help(sys.stdout)
            continue
        gateways.append(node)

    max_hops = DEFAULT_MAX_HOPS
    if args.max_hops is not None:
        log.debug("Specified TTL %s", args.max_hops)
        max_hops = parse_int(args.max_hops)

    timeout_ms = DEFAULT_TIMEOUT_MS
    if args.timeout is not None:
        log.debug("Specified Timeout %s", args.timeout)
        timeout_ms = max(0, parse_int(args.timeout))

    if destination is None:
        return None
    return Settings(
        destination=destination,
        gateways=tuple(gateways),
        max_hops=max_hops,
        timeout_ms=timeout_ms,
        verbose=args.verbose,
    )


def main(argv=None, prober_factory=None) -> int:
    ap = build_argparser()
    argv = sys.argv[1:] if argv is None else list(argv)
    if not argv:
        ap.print_help(sys.stdout)
        return EXIT_NO_ARGS

    args, rest = ap.parse_known_args(argv)
    setup_logging(args.verbose)
    if rest:
        log.debug("Ignoring unrecognized arguments: %s", " ".join(rest))
    if args.help:
        ap.print_help(sys.stdout)

    settings = settings_from_args(args, ap)
    if settings is None:
        print("No destination specified")
        if args.verbose:
            ap.print_help(sys.stdout)
        return EXIT_NO_DESTINATION

    # no gateways: we just check the host is up
    if not settings.gateways:
        print("No gateways specified")
        if args.verbose:
            ap.print_help(sys.stdout)

    if prober_factory is None:
        from routecheck.prober.icmp import IcmpProber
        prober_factory = IcmpProber

    try:
        prober = prober_factory()
    except TransportInitError as e:
        log.debug("Could not create ICMP handle (%s)", e)
        return EXIT_ICMP_INIT

    with prober:
        run = RouteChecker(prober, settings).run()

    if not run.dest_reached:
        return EXIT_DEST_UNREACHABLE

    for line in build_report(run.destination, run.gateways):
        print(line)
    return EXIT_OK


def main_entry():
    sys.exit(main())
