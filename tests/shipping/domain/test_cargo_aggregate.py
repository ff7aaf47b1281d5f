"""Tests for the Cargo aggregate, its Leg entity and RouteSpecification."""

from datetime import UTC, datetime

import pytest
from protean.exceptions import ValidationError
from shipping.cargo.cargo import (
    Cargo,
    Leg,
    RouteSpecification,
    itinerary_from_json,
    itinerary_to_json,
)
from shipping.cargo.delivery import RoutingStatus, TransportStatus
from shipping.cargo.events import CargoBooked, CargoDestinationChanged, CargoHandled, CargoRouted
from shipping.cargo.itinerary import Itinerary
from shipping.handling.handling_event import ActivityType, HandlingEvent


def _at(month, day):
    return datetime(2024, month, day, tzinfo=UTC)


def _receive():
    return HandlingEvent(
        tracking_id="ABC123",
        activity_type=ActivityType.RECEIVE.value,
        location="SESTO",
        completion_time=_at(1, 1),
        registration_time=_at(1, 1),
    )


def _book(route_specification):
    return Cargo.book(tracking_id="ABC123", route_specification=route_specification)


class TestRouteSpecification:
    def test_construction(self, route_specification):
        assert route_specification.origin == "SESTO"
        assert route_specification.destination == "FIHEL"

    def test_origin_must_differ_from_destination(self):
        with pytest.raises(ValidationError) as exc:
            RouteSpecification(origin="SESTO", destination="SESTO", arrival_deadline=_at(12, 1))
        assert "destination" in exc.value.messages

    def test_with_destination_keeps_origin_and_deadline(self, route_specification):
        changed = route_specification.with_destination("AUMEL")

        assert changed.origin == "SESTO"
        assert changed.destination == "AUMEL"
        assert changed.arrival_deadline == route_specification.arrival_deadline
        assert route_specification.destination == "FIHEL"


class TestLeg:
    def test_unload_must_follow_load(self):
        with pytest.raises(ValidationError) as exc:
            Leg(
                position=0,
                voyage_number="V1",
                load_location="SESTO",
                unload_location="DEHAM",
                load_time=_at(1, 5),
                unload_time=_at(1, 1),
            )
        assert "unload_time" in exc.value.messages

    def test_json_round_trip_keeps_order(self, itinerary):
        rebuilt = itinerary_from_json(itinerary_to_json(itinerary))

        assert rebuilt == itinerary
        assert [leg.position for leg in rebuilt.legs] == [0, 1]

    def test_malformed_json_rejected(self):
        with pytest.raises(ValidationError):
            itinerary_from_json("not json")


class TestBooking:
    def test_initial_state(self, route_specification):
        cargo = _book(route_specification)

        assert cargo.tracking_id == "ABC123"
        assert cargo.origin == "SESTO"
        assert cargo.itinerary.is_empty()
        assert cargo.delivery.transport_status == TransportStatus.NOT_RECEIVED.value
        assert cargo.delivery.routing_status == RoutingStatus.NOT_ROUTED.value
        assert cargo.delivery.misdirected is False

    def test_raises_cargo_booked(self, route_specification):
        cargo = _book(route_specification)

        assert len(cargo._events) == 1
        event = cargo._events[0]
        assert isinstance(event, CargoBooked)
        assert event.origin == "SESTO"
        assert event.destination == "FIHEL"


class TestRouteAssignment:
    def test_assign_routes_cargo(self, route_specification, itinerary):
        cargo = _book(route_specification)
        cargo.assign_to_route(itinerary, [])

        assert cargo.itinerary == itinerary
        assert cargo.delivery.routing_status == RoutingStatus.ROUTED.value
        assert cargo.delivery.eta == _at(1, 10)

    def test_assign_raises_cargo_routed(self, route_specification, itinerary):
        cargo = _book(route_specification)
        cargo.assign_to_route(itinerary, [])

        event = cargo._events[-1]
        assert isinstance(event, CargoRouted)
        assert event.routing_status == RoutingStatus.ROUTED.value
        assert itinerary_from_json(event.legs) == itinerary

    def test_reassignment_replaces_legs(self, route_specification, itinerary):
        cargo = _book(route_specification)
        cargo.assign_to_route(itinerary, [])

        direct = Itinerary(
            [
                Leg(
                    position=0,
                    voyage_number="V7",
                    load_location="SESTO",
                    unload_location="FIHEL",
                    load_time=_at(2, 1),
                    unload_time=_at(2, 3),
                )
            ]
        )
        cargo.assign_to_route(direct, [])

        assert len(cargo.legs) == 1
        assert cargo.itinerary.legs[0].voyage_number == "V7"

    def test_unsatisfying_itinerary_accepted_but_misrouted(self, itinerary):
        spec = RouteSpecification(origin="SESTO", destination="AUMEL", arrival_deadline=_at(12, 1))
        cargo = _book(spec)
        cargo.assign_to_route(itinerary, [])

        assert len(cargo.legs) == 2
        assert cargo.delivery.routing_status == RoutingStatus.MISROUTED.value

    def test_assignment_considers_existing_history(self, route_specification, itinerary):
        cargo = _book(route_specification)
        cargo.assign_to_route(itinerary, [_receive()])

        assert cargo.delivery.transport_status == TransportStatus.IN_PORT.value
        assert cargo.delivery.next_expected_activity.voyage_number == "V1"


class TestDestinationChange:
    def test_keeps_itinerary_and_surfaces_misrouting(self, route_specification, itinerary):
        cargo = _book(route_specification)
        cargo.assign_to_route(itinerary, [])

        cargo.specify_new_route(route_specification.with_destination("AUMEL"), [])

        assert cargo.route_specification.destination == "AUMEL"
        assert cargo.itinerary == itinerary
        assert cargo.delivery.routing_status == RoutingStatus.MISROUTED.value

    def test_raises_destination_changed(self, route_specification):
        cargo = _book(route_specification)
        cargo.specify_new_route(route_specification.with_destination("AUMEL"), [])

        event = cargo._events[-1]
        assert isinstance(event, CargoDestinationChanged)
        assert event.previous_destination == "FIHEL"
        assert event.new_destination == "AUMEL"


class TestHandling:
    def test_register_handling_rederives(self, route_specification, itinerary):
        cargo = _book(route_specification)
        cargo.assign_to_route(itinerary, [])

        receive = _receive()
        cargo.register_handling(str(receive.id), [receive])

        assert cargo.delivery.transport_status == TransportStatus.IN_PORT.value
        assert cargo.delivery.last_known_location == "SESTO"

        event = cargo._events[-1]
        assert isinstance(event, CargoHandled)
        assert event.transport_status == TransportStatus.IN_PORT.value
        assert event.handling_event_id == str(receive.id)
