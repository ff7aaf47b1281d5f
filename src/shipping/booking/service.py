"""Booking service — the application's entry point for cargo operations.

Mutations go through Protean commands so they run inside the domain's unit of
work; reads go straight to the repositories and assemble views. Every
mutation of an existing cargo holds that cargo's lock for its whole
load-change-save cycle.
"""

from datetime import datetime

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from shipping.booking.assembler import CargoView, assemble_cargo_view
from shipping.cargo.booking import BookNewCargo
from shipping.cargo.cargo import Cargo, itinerary_to_json
from shipping.cargo.destination import ChangeDestination
from shipping.cargo.itinerary import Itinerary
from shipping.cargo.locks import CargoLocks, get_cargo_locks
from shipping.cargo.route_assignment import AssignCargoToRoute
from shipping.cargo.tracking_id import TrackingIdGenerator
from shipping.handling.history import HandlingHistory, RepositoryHandlingHistory
from shipping.handling.registration import RegisterHandlingEvent
from shipping.location.location import Location
from shipping.routing import get_routing
from shipping.routing.port import RoutingPort

logger = structlog.get_logger(__name__)


class BookingService:
    def __init__(
        self,
        routing: RoutingPort | None = None,
        history: HandlingHistory | None = None,
        locks: CargoLocks | None = None,
        tracking_ids: TrackingIdGenerator | None = None,
    ) -> None:
        self._routing = routing
        self.history = history or RepositoryHandlingHistory()
        self.locks = locks or get_cargo_locks()
        self.tracking_ids = tracking_ids or TrackingIdGenerator()

    @property
    def routing(self) -> RoutingPort:
        return self._routing or get_routing()

    def _allocate_tracking_id(self) -> str:
        repo = current_domain.repository_for(Cargo)
        while True:
            tracking_id = self.tracking_ids.next_tracking_id()
            try:
                repo.get(tracking_id)
            except ObjectNotFoundError:
                return tracking_id
            logger.warning("Tracking id collision, regenerating", tracking_id=tracking_id)

    def book_new_cargo(self, origin: str, destination: str, arrival_deadline: datetime) -> str:
        """Book a cargo and return its new tracking id."""
        tracking_id = self._allocate_tracking_id()
        return current_domain.process(
            BookNewCargo(
                tracking_id=tracking_id,
                origin=origin,
                destination=destination,
                arrival_deadline=arrival_deadline,
            ),
            asynchronous=False,
        )

    def request_possible_routes_for_cargo(self, tracking_id: str) -> list[Itinerary]:
        """Candidate itineraries for the cargo, or an empty list when it is unknown."""
        try:
            cargo = current_domain.repository_for(Cargo).get(tracking_id)
        except ObjectNotFoundError:
            logger.info("Routes requested for unknown cargo", tracking_id=tracking_id)
            return []

        return self.routing.fetch_routes(cargo.route_specification)

    def assign_cargo_to_route(self, tracking_id: str, itinerary: Itinerary) -> None:
        with self.locks.hold(tracking_id):
            current_domain.process(
                AssignCargoToRoute(tracking_id=tracking_id, legs=itinerary_to_json(itinerary)),
                asynchronous=False,
            )

    def change_destination(self, tracking_id: str, destination: str) -> None:
        with self.locks.hold(tracking_id):
            current_domain.process(
                ChangeDestination(tracking_id=tracking_id, destination=destination),
                asynchronous=False,
            )

    def register_handling_event(
        self,
        tracking_id: str,
        activity_type: str,
        location: str,
        completion_time: datetime,
        voyage_number: str | None = None,
    ) -> str:
        """Record a completed handling activity; the cargo is updated before this returns."""
        with self.locks.hold(tracking_id):
            return current_domain.process(
                RegisterHandlingEvent(
                    tracking_id=tracking_id,
                    activity_type=activity_type,
                    location=location,
                    voyage_number=voyage_number,
                    completion_time=completion_time,
                ),
                asynchronous=False,
            )

    def track(self, tracking_id: str) -> CargoView:
        cargo = current_domain.repository_for(Cargo).get(tracking_id)
        return assemble_cargo_view(cargo, self.history.query_history(cargo.tracking_id))

    def cargos(self) -> list[CargoView]:
        cargos = current_domain.repository_for(Cargo)._dao.query.order_by("tracking_id").limit(None).all().items
        return [assemble_cargo_view(cargo, self.history.query_history(cargo.tracking_id)) for cargo in cargos]

    def locations(self) -> list[Location]:
        return current_domain.repository_for(Location)._dao.query.order_by("un_locode").limit(None).all().items
