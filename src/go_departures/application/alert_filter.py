"""Narrowing of network-wide service alerts to a single route."""

from go_departures.domain.models import LineTopology, ServiceAlert


def filter_alerts(
    alerts: list[ServiceAlert], origin: str, destination: str, topology: LineTopology
) -> list[ServiceAlert]:
    """Keep system-wide alerts and alerts scoped to the route's line, origin or destination."""
    line = topology.line_for_route(origin, destination)
    route_keys = {origin, destination}
    if line is not None:
        route_keys.add(line.id)

    return [
        alert
        for alert in alerts
        if alert.is_system_wide or route_keys.intersection(alert.affected_routes)
    ]
