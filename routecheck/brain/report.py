# routecheck/brain/report.py


def build_report(destination, gateways) -> list[str]:
    lines = [f"Destination:{destination.identifier}:replied"]
    for gw in gateways:
        lines.append(f"Gateway:{gw.identifier}:{'replied' if gw.replied else 'no reply'}")
    return lines
