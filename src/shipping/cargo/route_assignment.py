"""Route assignment — command and handler."""

import structlog
from protean import handle
from protean.fields import Identifier, Text
from protean.utils.globals import current_domain

from shipping.cargo.cargo import Cargo, itinerary_from_json
from shipping.domain import shipping
from shipping.handling.history import RepositoryHandlingHistory

logger = structlog.get_logger(__name__)


@shipping.command(part_of="Cargo")
class AssignCargoToRoute:
    tracking_id = Identifier(required=True)
    legs = Text(required=True)  # JSON: list of leg dicts, in travel order


@shipping.command_handler(part_of=Cargo)
class AssignCargoToRouteHandler:
    @handle(AssignCargoToRoute)
    def assign_cargo_to_route(self, command):
        repo = current_domain.repository_for(Cargo)
        cargo = repo.get(command.tracking_id)

        itinerary = itinerary_from_json(command.legs)
        history = RepositoryHandlingHistory().query_history(cargo.tracking_id)
        cargo.assign_to_route(itinerary, history)
        repo.add(cargo)

        logger.info(
            "Cargo assigned to route",
            tracking_id=cargo.tracking_id,
            legs=len(itinerary),
            routing_status=cargo.delivery.routing_status,
        )
