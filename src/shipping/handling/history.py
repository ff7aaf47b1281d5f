"""Handling history — where the delivery engine reads events from.

``HandlingHistory`` is the port; ``RepositoryHandlingHistory`` answers it from
the HandlingEvent repository of the active domain.
"""

from abc import ABC, abstractmethod

from protean.utils.globals import current_domain

from shipping.handling.handling_event import HandlingEvent, chronological


class HandlingHistory(ABC):
    @abstractmethod
    def query_history(self, tracking_id: str) -> list[HandlingEvent]:
        """Return every handling event for the cargo, oldest first.

        An unknown tracking id yields an empty list.
        """


class RepositoryHandlingHistory(HandlingHistory):
    def query_history(self, tracking_id: str) -> list[HandlingEvent]:
        repo = current_domain.repository_for(HandlingEvent)
        results = (
            repo._dao.query.filter(tracking_id=str(tracking_id))
            .order_by(["completion_time", "registration_time"])
            .limit(None)
            .all()
        )
        return chronological(results.items)
