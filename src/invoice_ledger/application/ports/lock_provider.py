from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator


class LockProvider(ABC):
    """Port for per-invoice serialization.

    Recording a payment under a no-overpayment policy reads the balance and
    then inserts a payment. Both steps must happen while holding the lock
    for that invoice, or two concurrent payments could each see the same
    stale balance.

    Contract:
    - acquire() blocks until no other holder has the same resource_id
    - the lock is released when the context exits, normally or by exception
    - different resource_ids are independent
    """

    @abstractmethod
    @contextmanager
    def acquire(self, resource_id: str) -> Iterator[None]:
        """Hold the lock for resource_id for the duration of the context.

        Args:
            resource_id: Stable string key, e.g. ``str(invoice_id.value)``.
        """
        ...
