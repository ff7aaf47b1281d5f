"""Routing service port (abstract interface).

Computing feasible voyages is another system's job. The booking service only
needs candidate itineraries for a route specification, so that is the whole
contract.
"""

from abc import ABC, abstractmethod

from shipping.cargo.itinerary import Itinerary


class RoutingError(Exception):
    """The routing service could not produce candidate routes."""


class RoutingPort(ABC):
    """Abstract routing service interface."""

    @abstractmethod
    def fetch_routes(self, route_specification) -> list[Itinerary]:
        """Candidate itineraries for the route specification, best first."""
        ...
