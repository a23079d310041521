"""Payment totals and outstanding balance for a reservation."""

from __future__ import annotations

import math
from dataclasses import dataclass
from numbers import Number
from typing import Any, Iterable, Mapping, Optional, Union

from cabin_admin.core.availability import is_active

# Balances at or below this are treated as settled (float noise)
PENDING_BALANCE_EPSILON = 0.1

PaymentLike = Union[Mapping[str, Any], Number, None]


@dataclass(frozen=True)
class BalanceSummary:
    total_booking: float
    total_paid: float
    balance: float


def _as_amount(value: Any) -> float:
    return 0.0 if value is None else float(value)


def _payment_amount(payment: PaymentLike, confirmed_only: bool) -> float:
    if isinstance(payment, Mapping):
        if confirmed_only and payment.get("status", "confirmed") != "confirmed":
            return 0.0
        return _as_amount(payment.get("amount"))
    return _as_amount(payment)


def total_paid(payments: Iterable[PaymentLike], confirmed_only: bool = False) -> float:
    """
    Sum the recorded payment amounts.

    By default every payment counts, whatever its status, matching the gross
    recorded total shown on the payments screen. ``math.fsum`` keeps the
    result independent of the order of the list.

    Args:
        payments: Payment rows (mappings with ``amount``/``status``) or bare amounts
        confirmed_only: Only count payments whose status is ``confirmed``
    """
    return math.fsum(_payment_amount(payment, confirmed_only) for payment in payments)


def compute_balance(
    amount: Optional[Any],
    payments: Iterable[PaymentLike],
    confirmed_only: bool = False,
) -> BalanceSummary:
    """
    Derive total paid and remaining balance for one reservation.

    A missing quoted amount counts as zero. The balance goes negative when
    the guest has overpaid.

    Example:
        >>> compute_balance(100000, [30000, 20000])
        BalanceSummary(total_booking=100000.0, total_paid=50000.0, balance=50000.0)
    """
    total_booking = _as_amount(amount)
    paid = total_paid(payments, confirmed_only=confirmed_only)
    return BalanceSummary(total_booking=total_booking, total_paid=paid, balance=total_booking - paid)


def has_pending_balance(balance: float, status: Optional[str]) -> bool:
    """Return True when money is still owed on a non-cancelled reservation."""
    return balance > PENDING_BALANCE_EPSILON and is_active(status)
