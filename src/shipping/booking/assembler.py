"""Cargo view assembly — turns a cargo and its handling into display text.

The view is recomputed from the route specification, itinerary and handling
history every time, rather than trusting the cached delivery on the cargo.
Event timestamps come from each event's own completion time.
"""

from datetime import datetime

from pydantic import BaseModel

from shipping.cargo.delivery import TransportStatus, derive_delivery
from shipping.cargo.itinerary import is_expected
from shipping.handling.handling_event import ActivityType, chronological


class LegView(BaseModel):
    voyage_number: str
    from_location: str
    to_location: str
    load_time: datetime
    unload_time: datetime


class EventView(BaseModel):
    description: str
    expected: bool


class CargoView(BaseModel):
    tracking_id: str
    status_text: str
    origin: str
    destination: str
    eta: datetime | None = None
    next_expected_activity: str
    misrouted: bool
    routed: bool
    arrival_deadline: datetime
    legs: list[LegView] = []
    events: list[EventView] = []


_NO_EXPECTED_ACTIVITY = "There are currently no expected activities for this cargo."


def status_text(delivery) -> str:
    status = delivery.transport_status
    if status == TransportStatus.NOT_RECEIVED.value:
        return "Not received"
    if status == TransportStatus.IN_PORT.value:
        return f"In port {delivery.last_known_location}"
    if status == TransportStatus.ONBOARD_CARRIER.value:
        return f"Onboard voyage {delivery.current_voyage}"
    if status == TransportStatus.CLAIMED.value:
        return "Claimed"
    return "Unknown"


def next_expected_activity_text(activity) -> str:
    if activity is None or activity.activity_type == ActivityType.NOT_HANDLED.value:
        return _NO_EXPECTED_ACTIVITY

    prefix = "Next expected activity is to"
    verb = activity.activity_type.lower()
    if activity.activity_type == ActivityType.LOAD.value:
        return f"{prefix} {verb} cargo onto voyage {activity.voyage_number} in {activity.location}."
    if activity.activity_type == ActivityType.UNLOAD.value:
        return f"{prefix} {verb} cargo off of voyage {activity.voyage_number} in {activity.location}."
    return f"{prefix} {verb} cargo in {activity.location}."


_EVENT_DESCRIPTIONS = {
    ActivityType.NOT_HANDLED.value: "Cargo has not yet been received.",
    ActivityType.RECEIVE.value: "Received in {location}, at {at}.",
    ActivityType.LOAD.value: "Loaded onto voyage {voyage} in {location}, at {at}.",
    ActivityType.UNLOAD.value: "Unloaded off voyage {voyage} in {location}, at {at}.",
    ActivityType.CUSTOMS.value: "Cleared customs in {location}, at {at}.",
    ActivityType.CLAIM.value: "Claimed in {location}, at {at}.",
}


def event_description(event) -> str:
    template = _EVENT_DESCRIPTIONS.get(event.activity_type)
    if template is None:
        return "[Unknown status]"
    return template.format(
        location=event.location,
        voyage=event.voyage_number,
        at=event.completion_time.isoformat() if event.completion_time else "",
    )


def assemble_cargo_view(cargo, history) -> CargoView:
    """Build the display view of a cargo from the cargo and its handling history."""
    history = chronological(history)
    route_specification = cargo.route_specification
    itinerary = cargo.itinerary
    delivery = derive_delivery(route_specification, itinerary, history)

    return CargoView(
        tracking_id=str(cargo.tracking_id),
        status_text=status_text(delivery),
        origin=route_specification.origin,
        destination=route_specification.destination,
        eta=delivery.eta,
        next_expected_activity=next_expected_activity_text(delivery.next_expected_activity),
        misrouted=delivery.is_misrouted,
        routed=not itinerary.is_empty(),
        arrival_deadline=route_specification.arrival_deadline,
        legs=[
            LegView(
                voyage_number=leg.voyage_number,
                from_location=leg.load_location,
                to_location=leg.unload_location,
                load_time=leg.load_time,
                unload_time=leg.unload_time,
            )
            for leg in itinerary.legs
        ],
        events=[
            EventView(description=event_description(event), expected=is_expected(event, itinerary))
            for event in history
        ],
    )
