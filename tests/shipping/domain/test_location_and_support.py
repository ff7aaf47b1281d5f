"""Tests for the Location aggregate, tracking id allocation and cargo locks."""

import threading
import time

import pytest
from protean.exceptions import ValidationError
from shipping.cargo.locks import CargoLocks, get_cargo_locks
from shipping.cargo.tracking_id import TrackingIdGenerator
from shipping.location.location import Location


class TestLocation:
    def test_valid_code(self):
        location = Location(un_locode="SESTO", name="Stockholm")
        assert location.un_locode == "SESTO"
        assert location.name == "Stockholm"

    @pytest.mark.parametrize("code", ["sesto", "SES", "SESTO1", "SE-TO"])
    def test_invalid_code_rejected(self, code):
        with pytest.raises(ValidationError):
            Location(un_locode=code, name="Nowhere")


class TestTrackingIdGenerator:
    def test_format(self):
        tracking_id = TrackingIdGenerator().next_tracking_id()

        assert len(tracking_id) == 10
        assert tracking_id == tracking_id.upper()
        int(tracking_id, 16)

    def test_unique(self):
        generator = TrackingIdGenerator()
        ids = {generator.next_tracking_id() for _ in range(500)}
        assert len(ids) == 500


class TestCargoLocks:
    def test_lock_exists_only_while_held(self):
        locks = CargoLocks()
        with locks.hold("ABC123"):
            with locks.hold("XYZ789"):
                assert len(locks) == 2
            assert len(locks) == 1
        assert len(locks) == 0

    def test_reentrant(self):
        locks = CargoLocks()
        with locks.hold("ABC123"):
            with locks.hold("ABC123"):
                assert len(locks) == 1
            assert len(locks) == 1
        assert len(locks) == 0

    def test_released_when_body_raises(self):
        locks = CargoLocks()
        with pytest.raises(RuntimeError):
            with locks.hold("ABC123"):
                raise RuntimeError("boom")
        assert len(locks) == 0

    def test_serializes_holders_of_one_cargo(self):
        locks = CargoLocks()
        active = []
        overlaps = []

        def worker():
            with locks.hold("ABC123"):
                active.append(1)
                if len(active) > 1:
                    overlaps.append(1)
                time.sleep(0.01)
                active.pop()

        threads = [threading.Thread(target=worker) for _ in range(5)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert overlaps == []

    def test_module_singleton(self):
        assert get_cargo_locks() is get_cargo_locks()
