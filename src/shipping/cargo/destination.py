"""Destination change — command and handler.

Only the destination moves; origin and arrival deadline stay as booked, and
the current itinerary is left in place for the delivery to judge.
"""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from shipping.cargo.cargo import Cargo
from shipping.domain import shipping
from shipping.handling.history import RepositoryHandlingHistory
from shipping.location.location import Location

logger = structlog.get_logger(__name__)


@shipping.command(part_of="Cargo")
class ChangeDestination:
    tracking_id = Identifier(required=True)
    destination = String(required=True, max_length=5)


@shipping.command_handler(part_of=Cargo)
class ChangeDestinationHandler:
    @handle(ChangeDestination)
    def change_destination(self, command):
        repo = current_domain.repository_for(Cargo)
        cargo = repo.get(command.tracking_id)
        location = current_domain.repository_for(Location).get(command.destination)

        history = RepositoryHandlingHistory().query_history(cargo.tracking_id)
        cargo.specify_new_route(
            cargo.route_specification.with_destination(location.un_locode),
            history,
        )
        repo.add(cargo)

        logger.info(
            "Cargo destination changed",
            tracking_id=cargo.tracking_id,
            destination=location.un_locode,
            routing_status=cargo.delivery.routing_status,
        )
