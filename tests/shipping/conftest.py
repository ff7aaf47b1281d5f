"""Shared fixtures for the Shipping domain tests."""

from datetime import UTC, datetime

import pytest
from protean import current_domain
from shipping.cargo.cargo import Leg, RouteSpecification
from shipping.cargo.itinerary import Itinerary
from shipping.location.location import Location
from shipping.location.registration import seed_sample_locations


@pytest.fixture()
def route_specification():
    """Stockholm to Helsinki, due on the first of December."""
    return RouteSpecification(
        origin="SESTO",
        destination="FIHEL",
        arrival_deadline=datetime(2024, 12, 1, tzinfo=UTC),
    )


@pytest.fixture()
def itinerary():
    """V1 Stockholm to Hamburg, then V2 Hamburg to Helsinki."""
    return Itinerary(
        [
            Leg(
                position=0,
                voyage_number="V1",
                load_location="SESTO",
                unload_location="DEHAM",
                load_time=datetime(2024, 1, 1, tzinfo=UTC),
                unload_time=datetime(2024, 1, 5, tzinfo=UTC),
            ),
            Leg(
                position=1,
                voyage_number="V2",
                load_location="DEHAM",
                unload_location="FIHEL",
                load_time=datetime(2024, 1, 6, tzinfo=UTC),
                unload_time=datetime(2024, 1, 10, tzinfo=UTC),
            ),
        ]
    )


@pytest.fixture()
def sample_locations():
    seed_sample_locations()
    return current_domain.repository_for(Location)._dao.query.all().items
