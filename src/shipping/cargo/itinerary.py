"""Itinerary and the rules for matching handling against it.

An itinerary is the ordered list of voyage legs a cargo has been booked on.
From it we can tell whether the route requirement is met at all, and which
handling activities we should expect to see, in which order.
"""

from protean.exceptions import ValidationError

from shipping.handling.handling_event import ActivityType, HandlingActivity


def _leg_key(leg) -> tuple:
    return (
        leg.voyage_number,
        leg.load_location,
        leg.unload_location,
        leg.load_time,
        leg.unload_time,
    )


def _activity_key(activity_type, location, voyage_number) -> tuple:
    return (str(activity_type), location, voyage_number or None)


class Itinerary:
    """Immutable, connected sequence of legs.

    Each leg must start where the previous one ended, and no earlier than the
    previous one unloaded. A disjoint sequence is rejected on construction.
    """

    def __init__(self, legs=()):
        self._legs = tuple(legs)

        for previous, following in zip(self._legs, self._legs[1:]):
            if previous.unload_location != following.load_location:
                raise ValidationError(
                    {
                        "legs": [
                            f"Voyage {following.voyage_number} loads at {following.load_location} "
                            f"but voyage {previous.voyage_number} unloads at {previous.unload_location}"
                        ]
                    }
                )
            if previous.unload_time > following.load_time:
                raise ValidationError(
                    {
                        "legs": [
                            f"Voyage {following.voyage_number} loads before "
                            f"voyage {previous.voyage_number} unloads"
                        ]
                    }
                )

    @property
    def legs(self) -> tuple:
        return self._legs

    def is_empty(self) -> bool:
        return not self._legs

    @property
    def initial_departure_location(self) -> str | None:
        return self._legs[0].load_location if self._legs else None

    @property
    def final_arrival_location(self) -> str | None:
        return self._legs[-1].unload_location if self._legs else None

    @property
    def final_arrival_time(self):
        return self._legs[-1].unload_time if self._legs else None

    def __len__(self) -> int:
        return len(self._legs)

    def __iter__(self):
        return iter(self._legs)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Itinerary):
            return NotImplemented
        return [_leg_key(leg) for leg in self._legs] == [_leg_key(leg) for leg in other._legs]

    def __repr__(self) -> str:
        voyages = ", ".join(f"{leg.voyage_number}:{leg.load_location}->{leg.unload_location}" for leg in self._legs)
        return f"Itinerary([{voyages}])"


def satisfies(itinerary: Itinerary, route_specification) -> bool:
    """True when the itinerary leaves from the origin and reaches the destination in time."""
    if itinerary.is_empty():
        return False
    return (
        itinerary.initial_departure_location == route_specification.origin
        and itinerary.final_arrival_location == route_specification.destination
        and itinerary.final_arrival_time <= route_specification.arrival_deadline
    )


def expected_activities(itinerary: Itinerary) -> tuple[HandlingActivity, ...]:
    """Every handling activity the itinerary implies, in the order it should happen."""
    if itinerary.is_empty():
        return ()

    activities = [
        HandlingActivity(
            activity_type=ActivityType.RECEIVE.value,
            location=itinerary.initial_departure_location,
        )
    ]
    for leg in itinerary.legs:
        activities.append(
            HandlingActivity(
                activity_type=ActivityType.LOAD.value,
                location=leg.load_location,
                voyage_number=leg.voyage_number,
            )
        )
        activities.append(
            HandlingActivity(
                activity_type=ActivityType.UNLOAD.value,
                location=leg.unload_location,
                voyage_number=leg.voyage_number,
            )
        )
    activities.append(
        HandlingActivity(
            activity_type=ActivityType.CLAIM.value,
            location=itinerary.final_arrival_location,
        )
    )
    return tuple(activities)


def expected_position(event, itinerary: Itinerary) -> int | None:
    """Index of the event's activity in the expected sequence, or None."""
    if ActivityType(event.activity_type) == ActivityType.CUSTOMS:
        return None

    key = _activity_key(event.activity_type, event.location, event.voyage_number)
    for index, activity in enumerate(expected_activities(itinerary)):
        if _activity_key(activity.activity_type, activity.location, activity.voyage_number) == key:
            return index
    return None


def is_expected(event, itinerary: Itinerary) -> bool:
    """True when the event's activity appears anywhere in the itinerary's expected sequence.

    Customs events never derive from legs, so they are never expected; they
    are tolerated rather than treated as a deviation.
    """
    return expected_position(event, itinerary) is not None
