"""Cargo aggregate root with the Leg entity and RouteSpecification value object.

A cargo is booked against a route specification, later assigned to an
itinerary of legs, and handled at ports along the way. Its ``delivery`` is a
cache of what ``derive_delivery`` says about those three things; every
mutation below ends by refreshing it.
"""

import json
from datetime import UTC, datetime

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer, String, ValueObject

from shipping.cargo.delivery import Delivery, derive_delivery
from shipping.cargo.events import CargoBooked, CargoDestinationChanged, CargoHandled, CargoRouted
from shipping.cargo.itinerary import Itinerary
from shipping.domain import shipping
from shipping.utils.timestamps import as_utc


@shipping.value_object(part_of="Cargo")
class RouteSpecification:
    """Where the cargo starts, where it must end up, and by when."""

    origin = String(required=True, max_length=5)
    destination = String(required=True, max_length=5)
    arrival_deadline = DateTime(required=True)

    @invariant.post
    def origin_and_destination_must_differ(self):
        if self.origin == self.destination:
            raise ValidationError({"destination": ["Destination must differ from origin"]})

    def with_destination(self, destination: str) -> "RouteSpecification":
        return RouteSpecification(
            origin=self.origin,
            destination=destination,
            arrival_deadline=self.arrival_deadline,
        )


@shipping.entity(part_of="Cargo")
class Leg:
    """One voyage segment of an itinerary."""

    position = Integer(required=True, min_value=0)
    voyage_number = String(required=True, max_length=20)
    load_location = String(required=True, max_length=5)
    unload_location = String(required=True, max_length=5)
    load_time = DateTime(required=True)
    unload_time = DateTime(required=True)

    @invariant.post
    def unload_must_follow_load(self):
        if self.load_time and self.unload_time and self.unload_time <= self.load_time:
            raise ValidationError({"unload_time": [f"Voyage {self.voyage_number} must unload after it loads"]})


def leg_to_dict(leg) -> dict:
    return {
        "voyage_number": leg.voyage_number,
        "load_location": leg.load_location,
        "unload_location": leg.unload_location,
        "load_time": leg.load_time.isoformat(),
        "unload_time": leg.unload_time.isoformat(),
    }


def leg_from_dict(data: dict, position: int = 0) -> Leg:
    def _as_datetime(value):
        return as_utc(datetime.fromisoformat(value) if isinstance(value, str) else value)

    return Leg(
        position=position,
        voyage_number=data["voyage_number"],
        load_location=data["load_location"],
        unload_location=data["unload_location"],
        load_time=_as_datetime(data["load_time"]),
        unload_time=_as_datetime(data["unload_time"]),
    )


def itinerary_to_json(itinerary: Itinerary) -> str:
    return json.dumps([leg_to_dict(leg) for leg in itinerary.legs])


def itinerary_from_json(payload: str) -> Itinerary:
    """Rebuild an itinerary from its JSON form, validating the leg chain."""
    try:
        legs_data = json.loads(payload) if isinstance(payload, str) else payload
    except json.JSONDecodeError as exc:
        raise ValidationError({"legs": [f"Legs are not valid JSON: {exc}"]}) from exc

    return Itinerary(leg_from_dict(data, position) for position, data in enumerate(legs_data))


@shipping.aggregate
class Cargo:
    tracking_id = Identifier(identifier=True, required=True)
    route_specification = ValueObject(RouteSpecification, required=True)
    legs = HasMany(Leg)
    delivery = ValueObject(Delivery)

    @invariant.post
    def legs_must_form_a_connected_itinerary(self):
        # Itinerary raises ValidationError on a broken chain
        Itinerary(sorted(self.legs, key=lambda leg: leg.position))

    @property
    def itinerary(self) -> Itinerary:
        return Itinerary(sorted(self.legs, key=lambda leg: leg.position))

    @property
    def origin(self) -> str:
        return self.route_specification.origin

    @classmethod
    def book(cls, tracking_id: str, route_specification: RouteSpecification) -> "Cargo":
        cargo = cls(
            tracking_id=tracking_id,
            route_specification=route_specification,
            delivery=derive_delivery(route_specification, Itinerary(), []),
        )
        cargo.raise_(
            CargoBooked(
                tracking_id=tracking_id,
                origin=route_specification.origin,
                destination=route_specification.destination,
                arrival_deadline=route_specification.arrival_deadline,
                booked_at=datetime.now(UTC),
            )
        )
        return cargo

    def derive_delivery_progress(self, history) -> None:
        """Refresh the cached delivery from the current route, itinerary and history."""
        self.delivery = derive_delivery(self.route_specification, self.itinerary, history)

    def assign_to_route(self, itinerary: Itinerary, history) -> None:
        """Replace the itinerary wholesale.

        Whether the new itinerary satisfies the route specification is not
        checked here; a mismatch surfaces as a Misrouted delivery.
        """
        with atomic_change(self):
            for leg in list(self.legs):
                self.remove_legs(leg)
            for position, leg in enumerate(itinerary.legs):
                self.add_legs(
                    Leg(
                        position=position,
                        voyage_number=leg.voyage_number,
                        load_location=leg.load_location,
                        unload_location=leg.unload_location,
                        load_time=leg.load_time,
                        unload_time=leg.unload_time,
                    )
                )
            self.derive_delivery_progress(history)

        self.raise_(
            CargoRouted(
                tracking_id=self.tracking_id,
                legs=itinerary_to_json(itinerary),
                routing_status=self.delivery.routing_status,
            )
        )

    def specify_new_route(self, route_specification: RouteSpecification, history) -> None:
        """Point the cargo somewhere else. The current itinerary is kept as is."""
        previous_destination = self.route_specification.destination
        self.route_specification = route_specification
        self.derive_delivery_progress(history)

        self.raise_(
            CargoDestinationChanged(
                tracking_id=self.tracking_id,
                previous_destination=previous_destination,
                new_destination=route_specification.destination,
                routing_status=self.delivery.routing_status,
            )
        )

    def register_handling(self, handling_event_id: str, history) -> None:
        """Account for a newly registered handling event found in ``history``."""
        self.derive_delivery_progress(history)

        self.raise_(
            CargoHandled(
                tracking_id=self.tracking_id,
                handling_event_id=handling_event_id,
                transport_status=self.delivery.transport_status,
                routing_status=self.delivery.routing_status,
                misdirected=self.delivery.misdirected,
                last_known_location=self.delivery.last_known_location,
                current_voyage=self.delivery.current_voyage,
            )
        )
