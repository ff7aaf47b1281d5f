"""Routing service abstraction — pluggable source of candidate itineraries."""

import os

from shipping.routing.port import RoutingPort

_routing_instance: RoutingPort | None = None


def get_routing() -> RoutingPort:
    """Return the configured routing adapter (singleton).

    Uses FakeRouting by default. Select another adapter through the
    ROUTING_ADAPTER environment variable.
    """
    global _routing_instance
    if _routing_instance is None:
        adapter = os.environ.get("ROUTING_ADAPTER", "fake")
        if adapter == "fake":
            from shipping.routing.fake_adapter import FakeRouting

            _routing_instance = FakeRouting()
        else:
            raise ValueError(f"Unknown routing adapter: {adapter}")
    return _routing_instance


def set_routing(routing: RoutingPort) -> None:
    """Override the active routing adapter (useful for tests)."""
    global _routing_instance
    _routing_instance = routing


def reset_routing() -> None:
    """Reset the routing singleton (useful for testing)."""
    global _routing_instance
    _routing_instance = None
