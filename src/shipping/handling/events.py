"""Handling domain events — facts reported by ports and carriers."""

from protean.fields import DateTime, Identifier, String

from shipping.domain import shipping


@shipping.event(part_of="HandlingEvent")
class HandlingEventRegistered:
    """A handling activity was completed for a cargo and recorded."""

    __version__ = 1

    handling_event_id = Identifier(required=True)
    tracking_id = Identifier(required=True)
    activity_type = String(required=True)
    location = String(required=True)
    voyage_number = String()
    completion_time = DateTime(required=True)
    registration_time = DateTime(required=True)
