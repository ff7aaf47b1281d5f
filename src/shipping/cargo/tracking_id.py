"""Tracking id allocation for newly booked cargo."""

from uuid import uuid4


class TrackingIdGenerator:
    """Hands out short, upper-case hexadecimal tracking ids."""

    length = 10

    def next_tracking_id(self) -> str:
        return uuid4().hex[: self.length].upper()
