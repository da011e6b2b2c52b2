from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import datetime


class TimeProvider(ABC):
    """Port for the clock used to stamp invoices and payments.

    Contract:
    - now() returns a datetime with tzinfo=datetime.UTC
    - naive datetimes and non-UTC offsets are never returned
    """

    @abstractmethod
    def now(self) -> datetime:
        """Return the current UTC datetime."""
        ...
