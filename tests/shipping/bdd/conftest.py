"""Shared BDD fixtures and step definitions for the Shipping domain."""

from datetime import UTC, datetime

import pytest
from pytest_bdd import given, parsers, then, when
from shipping.booking.service import BookingService
from shipping.location.registration import seed_sample_locations


def _date(text):
    return datetime.fromisoformat(text).replace(tzinfo=UTC)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def service():
    return BookingService()


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("the sample locations are registered")
def _():
    seed_sample_locations()


@given(
    parsers.cfparse('a cargo booked from "{origin}" to "{destination}" due "{deadline}"'),
    target_fixture="tracking_id",
)
def _(service, origin, destination, deadline):
    return service.book_new_cargo(origin, destination, _date(deadline))


@given("the cargo is assigned to the Stockholm-Hamburg-Helsinki itinerary")
@when("the cargo is assigned to the Stockholm-Hamburg-Helsinki itinerary")
def _(service, tracking_id, itinerary):
    service.assign_cargo_to_route(tracking_id, itinerary)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the cargo status is "{status}"'))
def _(service, tracking_id, status):
    assert service.track(tracking_id).status_text == status


@then("the cargo is routed")
def _(service, tracking_id):
    assert service.track(tracking_id).routed is True


@then("the cargo is not routed")
def _(service, tracking_id):
    assert service.track(tracking_id).routed is False


@then("the cargo is misrouted")
def _(service, tracking_id):
    assert service.track(tracking_id).misrouted is True


@then("the cargo is not misrouted")
def _(service, tracking_id):
    assert service.track(tracking_id).misrouted is False


@then(parsers.cfparse('the cargo eta is "{eta}"'))
def _(service, tracking_id, eta):
    assert service.track(tracking_id).eta == _date(eta)


@then("the cargo has no eta")
def _(service, tracking_id):
    assert service.track(tracking_id).eta is None


@then("every handling event is expected")
def _(service, tracking_id):
    assert all(event.expected for event in service.track(tracking_id).events)


@then(parsers.cfparse('the next expected activity is "{text}"'))
def _(service, tracking_id, text):
    assert service.track(tracking_id).next_expected_activity == text
