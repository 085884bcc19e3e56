"""
View state store.

Single mutable container for the board's current ViewState and countdown
texts, with subscribe/notify. Subscribers get the current value right
away and then every change.
"""

import logging
from typing import Callable, Optional

from .models import Loading, ViewState, same_view

logger = logging.getLogger(__name__)

StateListener = Callable[[ViewState], None]
CountdownListener = Callable[[dict[str, str]], None]
Unsubscribe = Callable[[], None]


class ViewStateStore:
    """
    Observable holder of the current ViewState.

    Writes are expected from one place only (the refresh scheduler's
    commit point); reads and subscriptions from anywhere on the loop.

    Usage:
        store = ViewStateStore()
        unsubscribe = store.subscribe(lambda state: print(state.kind))
        store.set_state(Empty())
        unsubscribe()
    """

    def __init__(self, initial: Optional[ViewState] = None):
        self._state: ViewState = initial if initial is not None else Loading()
        self._countdowns: dict[str, str] = {}
        self._state_listeners: list[StateListener] = []
        self._countdown_listeners: list[CountdownListener] = []

    @property
    def state(self) -> ViewState:
        return self._state

    @property
    def countdowns(self) -> dict[str, str]:
        return dict(self._countdowns)

    # -------------------------------------------------------------------------
    # Subscriptions
    # -------------------------------------------------------------------------

    def subscribe(self, listener: StateListener) -> Unsubscribe:
        """Register a state listener; it is called immediately with the current state."""
        self._state_listeners.append(listener)
        self._deliver(listener, self._state)

        def unsubscribe():
            if listener in self._state_listeners:
                self._state_listeners.remove(listener)

        return unsubscribe

    def subscribe_countdowns(self, listener: CountdownListener) -> Unsubscribe:
        """Register a countdown listener; it is called immediately with the current texts."""
        self._countdown_listeners.append(listener)
        self._deliver(listener, self.countdowns)

        def unsubscribe():
            if listener in self._countdown_listeners:
                self._countdown_listeners.remove(listener)

        return unsubscribe

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def set_state(self, state: ViewState) -> bool:
        """
        Replace the current state.

        Listeners are not notified when the new state looks the same as the
        old one (same Loaded race ids in the same order, or an equal state).

        Returns:
            True if listeners were notified
        """
        changed = not same_view(self._state, state)
        self._state = state
        if changed:
            logger.debug(f"View state -> {state.kind.value}")
            for listener in list(self._state_listeners):
                self._deliver(listener, state)
        return changed

    def set_countdowns(self, countdowns: dict[str, str]) -> bool:
        """Replace countdown texts; notifies only if any text changed."""
        if countdowns == self._countdowns:
            return False
        self._countdowns = dict(countdowns)
        for listener in list(self._countdown_listeners):
            self._deliver(listener, self.countdowns)
        return True

    @staticmethod
    def _deliver(listener, value):
        try:
            listener(value)
        except Exception as e:
            logger.error(f"View state listener failed: {e}")
