"""Deterministic fake routing service for development and testing.

Offers a direct voyage plus one two-leg route through each hub port. Legs
are scheduled backwards from the arrival deadline so every suggestion
satisfies the route specification it was asked for. It can be configured
at runtime to fail, like the other fake adapters.
"""

from datetime import timedelta

from shipping.cargo.cargo import Leg
from shipping.cargo.itinerary import Itinerary
from shipping.routing.port import RoutingError, RoutingPort

SAILING_TIME = timedelta(days=3)
LAYOVER = timedelta(days=1)
DEFAULT_HUBS = ("DEHAM", "NLRTM", "USNYC")


def _voyage_number(load_location: str, unload_location: str) -> str:
    return f"{load_location[2:]}{unload_location[2:]}"


class FakeRouting(RoutingPort):
    """Configurable fake routing service."""

    def __init__(self, hubs: tuple[str, ...] = DEFAULT_HUBS) -> None:
        self.hubs = tuple(hubs)
        self.should_succeed: bool = True
        self.failure_reason: str = "Routing service unavailable"
        self.calls: list[dict] = []

    def configure(self, should_succeed: bool, failure_reason: str = "Routing service unavailable") -> None:
        """Configure routing behavior at runtime."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def fetch_routes(self, route_specification) -> list[Itinerary]:
        self.calls.append(
            {
                "method": "fetch_routes",
                "origin": route_specification.origin,
                "destination": route_specification.destination,
                "arrival_deadline": route_specification.arrival_deadline,
            }
        )

        if not self.should_succeed:
            raise RoutingError(self.failure_reason)

        origin = route_specification.origin
        destination = route_specification.destination
        deadline = route_specification.arrival_deadline

        routes = [self._schedule([origin, destination], deadline)]
        for hub in self.hubs:
            if hub in (origin, destination):
                continue
            routes.append(self._schedule([origin, hub, destination], deadline))
        return routes

    def _schedule(self, stops: list[str], deadline) -> Itinerary:
        hops = list(zip(stops, stops[1:]))
        unload_time = deadline - LAYOVER
        legs = []
        for load_location, unload_location in reversed(hops):
            load_time = unload_time - SAILING_TIME
            legs.append((load_location, unload_location, load_time, unload_time))
            unload_time = load_time - LAYOVER
        legs.reverse()

        return Itinerary(
            Leg(
                position=position,
                voyage_number=_voyage_number(load_location, unload_location),
                load_location=load_location,
                unload_location=unload_location,
                load_time=load_time,
                unload_time=unload_time,
            )
            for position, (load_location, unload_location, load_time, unload_time) in enumerate(legs)
        )
