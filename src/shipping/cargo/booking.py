"""Cargo booking — command and handler."""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import DateTime, Identifier, String
from protean.utils.globals import current_domain

from shipping.cargo.cargo import Cargo, RouteSpecification
from shipping.domain import shipping
from shipping.utils.timestamps import as_utc

logger = structlog.get_logger(__name__)


@shipping.command(part_of="Cargo")
class BookNewCargo:
    tracking_id = Identifier(required=True)
    origin = String(required=True, max_length=5)
    destination = String(required=True, max_length=5)
    arrival_deadline = DateTime(required=True)


@shipping.command_handler(part_of=Cargo)
class BookNewCargoHandler:
    @handle(BookNewCargo)
    def book_new_cargo(self, command):
        repo = current_domain.repository_for(Cargo)

        try:
            repo.get(command.tracking_id)
        except ObjectNotFoundError:
            pass
        else:
            raise ValidationError({"tracking_id": [f"Tracking id {command.tracking_id} is already in use"]})

        route_specification = RouteSpecification(
            origin=command.origin,
            destination=command.destination,
            arrival_deadline=as_utc(command.arrival_deadline),
        )
        cargo = Cargo.book(tracking_id=command.tracking_id, route_specification=route_specification)
        repo.add(cargo)

        logger.info(
            "Cargo booked",
            tracking_id=cargo.tracking_id,
            origin=route_specification.origin,
            destination=route_specification.destination,
        )
        return cargo.tracking_id
