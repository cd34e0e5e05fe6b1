"""
Last-seen dispatcher port (interface).

Hands the last_seen telemetry write off the validation response path.
"""
from abc import ABC, abstractmethod
from datetime import datetime


class LastSeenDispatcher(ABC):
    """
    Abstract dispatcher for best-effort last_seen writes.

    Implementations should return as soon as the write is scheduled.
    """

    @abstractmethod
    async def dispatch(self, client_id: str, seen_at: datetime) -> None:
        """
        Schedule a last_seen update.

        Args:
            client_id: Normalized client id
            seen_at: Time of the successful validation
        """
        pass
