"""Shipping bounded context — Cargo Booking, Routing and Tracking.

Books cargo against a route specification, assigns itineraries, and records
handling events as cargo moves. The cargo's delivery progress is always
derived from its route specification, itinerary and handling history.
"""

from protean.domain import Domain

from shipping.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging()

# Get logger for this module
logger = get_logger(__name__)

# Domain Composition Root
shipping = Domain(name="shipping")
