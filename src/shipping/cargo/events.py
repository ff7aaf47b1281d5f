"""Domain events for the Cargo aggregate."""

from protean.fields import Boolean, DateTime, Identifier, String, Text

from shipping.domain import shipping


@shipping.event(part_of="Cargo")
class CargoBooked:
    """A new cargo was booked for transport between two locations."""

    __version__ = 1

    tracking_id = Identifier(required=True)
    origin = String(required=True)
    destination = String(required=True)
    arrival_deadline = DateTime(required=True)
    booked_at = DateTime(required=True)


@shipping.event(part_of="Cargo")
class CargoRouted:
    """The cargo was assigned to an itinerary, replacing any previous one."""

    __version__ = 1

    tracking_id = Identifier(required=True)
    legs = Text(required=True)  # JSON: list of leg dicts
    routing_status = String(required=True)


@shipping.event(part_of="Cargo")
class CargoDestinationChanged:
    """The cargo's route specification now points at a different destination."""

    __version__ = 1

    tracking_id = Identifier(required=True)
    previous_destination = String(required=True)
    new_destination = String(required=True)
    routing_status = String(required=True)


@shipping.event(part_of="Cargo")
class CargoHandled:
    """A handling event was applied and the delivery progress re-derived."""

    __version__ = 1

    tracking_id = Identifier(required=True)
    handling_event_id = Identifier(required=True)
    transport_status = String(required=True)
    routing_status = String(required=True)
    misdirected = Boolean(default=False)
    last_known_location = String()
    current_voyage = String()
