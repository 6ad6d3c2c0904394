import threading
from contextlib import contextmanager

from services.errors import ConflictError


class BuyerLockRegistry:
    """
    Non-blocking, per-buyer mutual exclusion for checkout.

    Only buyers with a checkout in flight are kept in memory; a second
    attempt for the same buyer fails immediately instead of queueing.
    """

    def __init__(self):
        self._mutex = threading.Lock()
        self._held = set()

    def is_locked(self, buyer_id: int) -> bool:
        with self._mutex:
            return buyer_id in self._held

    @contextmanager
    def hold(self, buyer_id: int):
        with self._mutex:
            if buyer_id in self._held:
                raise ConflictError("Checkout already in progress for this buyer")
            self._held.add(buyer_id)
        try:
            yield
        finally:
            with self._mutex:
                self._held.discard(buyer_id)
