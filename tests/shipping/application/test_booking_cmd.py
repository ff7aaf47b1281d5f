"""Application tests for BookNewCargo."""

from datetime import UTC, datetime

import pytest
from protean import current_domain
from protean.exceptions import ValidationError
from shipping.cargo.booking import BookNewCargo
from shipping.cargo.cargo import Cargo
from shipping.cargo.delivery import RoutingStatus, TransportStatus


def _book(tracking_id="ABC123", origin="SESTO", destination="FIHEL"):
    return current_domain.process(
        BookNewCargo(
            tracking_id=tracking_id,
            origin=origin,
            destination=destination,
            arrival_deadline=datetime(2024, 12, 1, tzinfo=UTC),
        ),
        asynchronous=False,
    )


class TestBookNewCargo:
    def test_returns_tracking_id(self):
        assert _book() == "ABC123"

    def test_persists_initial_state(self):
        _book()

        cargo = current_domain.repository_for(Cargo).get("ABC123")
        assert cargo.route_specification.origin == "SESTO"
        assert cargo.route_specification.destination == "FIHEL"
        assert cargo.itinerary.is_empty()
        assert cargo.delivery.transport_status == TransportStatus.NOT_RECEIVED.value
        assert cargo.delivery.routing_status == RoutingStatus.NOT_ROUTED.value

    def test_duplicate_tracking_id_rejected(self):
        _book()

        with pytest.raises(ValidationError) as exc:
            _book()
        assert "tracking_id" in exc.value.messages

    def test_same_origin_and_destination_rejected(self):
        with pytest.raises(ValidationError):
            _book(destination="SESTO")
