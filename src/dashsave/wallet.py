from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING

from .binary import INT32_MAX
from .errors import InsufficientFunds, SaveValidationError

if TYPE_CHECKING:
    from .state import PersistentState

logger = logging.getLogger(__name__)


class Currency(Enum):
    SOFT = "coins"
    PREMIUM = "premium"


class CurrencyWallet:
    """Earn/spend access to the soft (fishbones) and premium currencies of a state."""

    def __init__(self, state: "PersistentState") -> None:
        self._state = state

    def balance(self, currency: Currency) -> int:
        return getattr(self._state, currency.value)

    def earn(self, currency: Currency, amount: int) -> int:
        if amount < 0:
            raise SaveValidationError("Amount to earn cannot be negative")
        total = self.balance(currency) + int(amount)
        if total > INT32_MAX:
            raise SaveValidationError(
                f"Earning {amount} {currency.value} would exceed the storable maximum {INT32_MAX}"
            )
        setattr(self._state, currency.value, total)
        logger.debug("Earned %d %s (total: %d)", amount, currency.value, total)
        return total

    def spend(self, currency: Currency, amount: int) -> int:
        if amount < 0:
            raise SaveValidationError("Amount to spend cannot be negative")
        held = self.balance(currency)
        if amount > held:
            raise InsufficientFunds(f"Cannot spend {amount} {currency.value}; only {held} available.")
        setattr(self._state, currency.value, held - amount)
        logger.debug("Spent %d %s (remaining: %d)", amount, currency.value, held - amount)
        return held - amount
