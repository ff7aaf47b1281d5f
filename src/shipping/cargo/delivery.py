"""Delivery derivation — the cargo's live progress, computed from facts.

``derive_delivery`` is a pure function of the route specification, the
assigned itinerary and the handling history. The result is cached on the
Cargo as a ``Delivery`` value object, but nothing ever edits that value in
place: it is recomputed whenever one of the three inputs changes.
"""

from enum import Enum

from protean.fields import Boolean, DateTime, String

from shipping.cargo.itinerary import Itinerary, expected_activities, expected_position, satisfies
from shipping.domain import shipping
from shipping.handling.handling_event import ActivityType, HandlingActivity, chronological


class TransportStatus(Enum):
    NOT_RECEIVED = "NotReceived"
    IN_PORT = "InPort"
    ONBOARD_CARRIER = "OnboardCarrier"
    CLAIMED = "Claimed"
    UNKNOWN = "Unknown"


class RoutingStatus(Enum):
    NOT_ROUTED = "NotRouted"
    ROUTED = "Routed"
    MISROUTED = "Misrouted"


_TRANSPORT_STATUS_BY_ACTIVITY = {
    ActivityType.RECEIVE: TransportStatus.IN_PORT,
    ActivityType.LOAD: TransportStatus.ONBOARD_CARRIER,
    ActivityType.UNLOAD: TransportStatus.IN_PORT,
    ActivityType.CUSTOMS: TransportStatus.IN_PORT,
    ActivityType.CLAIM: TransportStatus.CLAIMED,
}


@shipping.value_object(part_of="Cargo")
class Delivery:
    """Snapshot of where a cargo is and whether it is on track."""

    transport_status = String(
        required=True,
        choices=TransportStatus,
        default=TransportStatus.NOT_RECEIVED.value,
    )
    last_known_location = String(max_length=5)
    current_voyage = String(max_length=20)
    routing_status = String(
        required=True,
        choices=RoutingStatus,
        default=RoutingStatus.NOT_ROUTED.value,
    )
    next_activity_type = String(choices=ActivityType)
    next_activity_location = String(max_length=5)
    next_activity_voyage = String(max_length=20)
    eta = DateTime()
    misdirected = Boolean(default=False)

    @property
    def is_misrouted(self) -> bool:
        return self.routing_status == RoutingStatus.MISROUTED.value

    @property
    def next_expected_activity(self) -> HandlingActivity | None:
        if not self.next_activity_type:
            return None
        return HandlingActivity(
            activity_type=self.next_activity_type,
            location=self.next_activity_location,
            voyage_number=self.next_activity_voyage,
        )


def _transport_status(event) -> TransportStatus:
    try:
        activity = ActivityType(event.activity_type)
    except ValueError:
        return TransportStatus.UNKNOWN
    return _TRANSPORT_STATUS_BY_ACTIVITY.get(activity, TransportStatus.UNKNOWN)


def _has_unexpected_events(history, itinerary: Itinerary) -> bool:
    return any(
        expected_position(event, itinerary) is None
        for event in history
        if event.activity_type != ActivityType.CUSTOMS.value
    )


def _routing_status(route_specification, itinerary: Itinerary, history) -> RoutingStatus:
    if itinerary.is_empty():
        return RoutingStatus.NOT_ROUTED
    if not satisfies(itinerary, route_specification):
        return RoutingStatus.MISROUTED
    if _has_unexpected_events(history, itinerary):
        return RoutingStatus.MISROUTED
    return RoutingStatus.ROUTED


def _next_expected_activity(route_specification, itinerary: Itinerary, history) -> HandlingActivity | None:
    if itinerary.is_empty():
        return None

    if not history:
        return HandlingActivity(
            activity_type=ActivityType.RECEIVE.value,
            location=route_specification.origin,
        )

    if history[-1].activity_type == ActivityType.CLAIM.value:
        return None

    # Resume right after the most recent event that the itinerary accounts for
    last_position = None
    for event in history:
        position = expected_position(event, itinerary)
        if position is not None:
            last_position = position

    # Nothing the cargo went through is on the plan, so nothing is expected next
    if last_position is None:
        return None

    expected = expected_activities(itinerary)
    following = last_position + 1
    if following >= len(expected):
        return None
    return expected[following]


def derive_delivery(route_specification, itinerary: Itinerary, history) -> Delivery:
    """Compute a cargo's delivery progress from its route, itinerary and handling."""
    history = chronological(history)
    routing_status = _routing_status(route_specification, itinerary, history)
    misdirected = not itinerary.is_empty() and _has_unexpected_events(history, itinerary)
    next_activity = _next_expected_activity(route_specification, itinerary, history)

    if not history:
        transport_status = TransportStatus.NOT_RECEIVED
        last_known_location = None
        current_voyage = None
    else:
        last_event = history[-1]
        transport_status = _transport_status(last_event)
        if transport_status == TransportStatus.ONBOARD_CARRIER:
            last_known_location = None
            current_voyage = last_event.voyage_number
        else:
            last_known_location = last_event.location
            current_voyage = None

    eta = None
    if routing_status == RoutingStatus.ROUTED and transport_status != TransportStatus.CLAIMED:
        eta = itinerary.final_arrival_time

    return Delivery(
        transport_status=transport_status.value,
        last_known_location=last_known_location,
        current_voyage=current_voyage,
        routing_status=routing_status.value,
        next_activity_type=next_activity.activity_type if next_activity else None,
        next_activity_location=next_activity.location if next_activity else None,
        next_activity_voyage=next_activity.voyage_number if next_activity else None,
        eta=eta,
        misdirected=misdirected,
    )
