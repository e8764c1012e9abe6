"""
Refetch Signal.

Views that show server data subscribe here and reload when another action
(grant, decline, shift update, ...) changed the data behind them.
"""

import logging
from typing import Callable

logger = logging.getLogger(__name__)

RefetchCallback = Callable[[str], None]


class RefetchSignal:
    """
    Observable "data changed, reload" event.

    emit() calls every subscriber with the name of the source that changed
    data. A subscriber raising an exception does not stop delivery to the rest.
    """

    def __init__(self) -> None:
        self._subscribers: list[RefetchCallback] = []
        self._emitted: int = 0

    def subscribe(self, callback: RefetchCallback) -> Callable[[], None]:
        """
        Register a callback.

        Returns:
            A callable that unsubscribes the callback.
        """
        self._subscribers.append(callback)

        def _unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return _unsubscribe

    def emit(self, source: str) -> None:
        self._emitted += 1
        logger.debug(f"Refetch requested by '{source}' ({len(self._subscribers)} subscriber(s))")
        for callback in list(self._subscribers):
            try:
                callback(source)
            except Exception as e:
                logger.error(f"Refetch subscriber failed for '{source}': {e}")

    @property
    def emitted_count(self) -> int:
        """Number of emits since creation."""
        return self._emitted

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)
