"""Cargo reacts to handling — re-derives delivery when a handling event lands."""

import structlog
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from shipping.cargo.cargo import Cargo
from shipping.cargo.locks import get_cargo_locks
from shipping.domain import shipping
from shipping.handling.events import HandlingEventRegistered
from shipping.handling.history import RepositoryHandlingHistory

logger = structlog.get_logger(__name__)


@shipping.event_handler(part_of=Cargo, stream_category="shipping::handling_event")
class CargoHandlingEventHandler:
    """Applies registered handling events to the cargo they concern."""

    @handle(HandlingEventRegistered)
    def on_handling_event_registered(self, event: HandlingEventRegistered) -> None:
        with get_cargo_locks().hold(event.tracking_id):
            repo = current_domain.repository_for(Cargo)
            cargo = repo.get(event.tracking_id)

            history = RepositoryHandlingHistory().query_history(cargo.tracking_id)
            cargo.register_handling(str(event.handling_event_id), history)
            repo.add(cargo)

        logger.info(
            "Cargo handling applied",
            tracking_id=str(event.tracking_id),
            activity_type=event.activity_type,
            location=event.location,
            transport_status=cargo.delivery.transport_status,
            misdirected=cargo.delivery.misdirected,
        )
