"""HandlingEvent aggregate — an immutable record of cargo being handled.

A handling event is registered once, when a port or carrier reports that a
cargo was received, loaded, unloaded, cleared through customs, or claimed.
It is never edited afterwards; the cargo's delivery progress is derived from
the full chronological sequence of these records.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, String

from shipping.domain import shipping
from shipping.handling.events import HandlingEventRegistered
from shipping.utils.timestamps import as_utc


class ActivityType(Enum):
    NOT_HANDLED = "NotHandled"
    RECEIVE = "Receive"
    LOAD = "Load"
    UNLOAD = "Unload"
    CUSTOMS = "Customs"
    CLAIM = "Claim"


# Only carrier moves happen on a voyage
VOYAGE_ACTIVITIES = frozenset({ActivityType.LOAD, ActivityType.UNLOAD})

_ACTIVITY_VALUES = frozenset(activity.value for activity in ActivityType)


@shipping.value_object
class HandlingActivity:
    """What happened to a cargo (or is expected to happen next), and where."""

    activity_type = String(required=True, choices=ActivityType)
    location = String(required=True, max_length=5)
    voyage_number = String(max_length=20)


@shipping.aggregate
class HandlingEvent:
    tracking_id = Identifier(required=True)
    activity_type = String(required=True, choices=ActivityType)
    location = String(required=True, max_length=5)
    voyage_number = String(max_length=20)
    completion_time = DateTime(required=True)
    registration_time = DateTime(required=True)

    @invariant.post
    def voyage_number_only_for_carrier_moves(self):
        if self.activity_type not in _ACTIVITY_VALUES:
            return
        needs_voyage = ActivityType(self.activity_type) in VOYAGE_ACTIVITIES
        if needs_voyage and not self.voyage_number:
            raise ValidationError({"voyage_number": [f"{self.activity_type} events require a voyage number"]})
        if not needs_voyage and self.voyage_number:
            raise ValidationError({"voyage_number": [f"{self.activity_type} events cannot reference a voyage"]})

    @classmethod
    def register(
        cls,
        tracking_id: str,
        activity_type: str,
        location: str,
        completion_time: datetime,
        voyage_number: str | None = None,
    ):
        """Record a completed handling activity for a cargo."""
        registered_at = datetime.now(UTC)
        completion_time = as_utc(completion_time)
        event = cls(
            tracking_id=tracking_id,
            activity_type=activity_type,
            location=location,
            voyage_number=voyage_number or None,
            completion_time=completion_time,
            registration_time=registered_at,
        )
        event.raise_(
            HandlingEventRegistered(
                handling_event_id=str(event.id),
                tracking_id=tracking_id,
                activity_type=activity_type,
                location=location,
                voyage_number=voyage_number or None,
                completion_time=completion_time,
                registration_time=registered_at,
            )
        )
        return event

    @property
    def activity(self) -> HandlingActivity:
        return HandlingActivity(
            activity_type=self.activity_type,
            location=self.location,
            voyage_number=self.voyage_number,
        )


def chronological(events) -> list:
    """Order handling events by completion time, registration time breaking ties."""
    return sorted(events, key=lambda e: (e.completion_time, e.registration_time))
