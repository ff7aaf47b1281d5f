"""Handling event registration — command and handler.

Ports and carriers report completed activities here. The event is recorded
against an existing cargo at a known location; the cargo itself is brought up
to date by its own handler reacting to ``HandlingEventRegistered``.
"""

import structlog
from protean import handle
from protean.fields import DateTime, Identifier, String
from protean.utils.globals import current_domain

from shipping.cargo.cargo import Cargo
from shipping.domain import shipping
from shipping.handling.handling_event import ActivityType, HandlingEvent
from shipping.location.location import Location

logger = structlog.get_logger(__name__)


@shipping.command(part_of="HandlingEvent")
class RegisterHandlingEvent:
    tracking_id = Identifier(required=True)
    activity_type = String(required=True, choices=ActivityType)
    location = String(required=True, max_length=5)
    voyage_number = String(max_length=20)
    completion_time = DateTime(required=True)


@shipping.command_handler(part_of=HandlingEvent)
class RegisterHandlingEventHandler:
    @handle(RegisterHandlingEvent)
    def register_handling_event(self, command):
        # Both raise ObjectNotFoundError for unknown ids
        current_domain.repository_for(Cargo).get(command.tracking_id)
        current_domain.repository_for(Location).get(command.location)

        event = HandlingEvent.register(
            tracking_id=command.tracking_id,
            activity_type=command.activity_type,
            location=command.location,
            completion_time=command.completion_time,
            voyage_number=command.voyage_number,
        )
        current_domain.repository_for(HandlingEvent).add(event)

        logger.info(
            "Handling event registered",
            handling_event_id=str(event.id),
            tracking_id=str(command.tracking_id),
            activity_type=command.activity_type,
            location=command.location,
            voyage_number=command.voyage_number,
        )
        return str(event.id)
