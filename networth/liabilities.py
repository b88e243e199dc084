"""
Liability records and per-step amortization.

Each projection step accrues interest on every debt at its annual rate,
scaled to the step length, and applies the minimum payment for the months
the step covers. A payment never exceeds what is owed and balances never
go negative.

Example
-------
>>> loan = Liability(id="l1", name="Car", balance=1000, interest_rate=12, minimum_payment=1000)
>>> step = amortize(loan, step_years=0.25)
>>> round(step.interest, 1), step.balance
(28.7, 0.0)
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Literal

from .constants import MONTHS_PER_YEAR
from .exceptions import ValidationError
from .utils import growth_factor, safe_float

__all__ = [
    "LiabilityType",
    "Liability",
    "AmortizationStep",
    "monthly_interest",
    "amortize",
]

LiabilityType = Literal["mortgage", "auto", "credit_card", "student", "other"]


@dataclass(frozen=True)
class Liability:
    """
    Outstanding debt.

    Parameters
    ----------
    id, name : str
        Identity and display name.
    balance : float
        Amount owed.
    interest_rate : float, default 0.0
        Annual interest in percent.
    minimum_payment : float, default 0.0
        Monthly payment.
    type : {"mortgage", "auto", "credit_card", "student", "other"}, default "other"
    """
    id: str
    name: str
    balance: float
    interest_rate: float = 0.0
    minimum_payment: float = 0.0
    type: LiabilityType = "other"

    def __post_init__(self) -> None:
        if not self.id:
            raise ValidationError(f"Liability '{self.name}' must have a non-empty id.")

    def with_balance(self, balance: float) -> "Liability":
        return replace(self, balance=balance)


@dataclass(frozen=True)
class AmortizationStep:
    """Outcome of one amortization step for a single liability."""
    interest: float
    payment: float
    balance: float


def monthly_interest(liability: Liability) -> float:
    """Simple monthly interest ``balance × rate / 100 / 12`` used for cash-flow figures."""
    return safe_float(liability.balance) * safe_float(liability.interest_rate) / 100.0 / MONTHS_PER_YEAR


def amortize(liability: Liability, step_years: float) -> AmortizationStep:
    """
    Accrue interest and apply payments to *liability* over one step.

    interest = balance × ((1 + rate/100) ** step_years − 1)
    payment  = min(minimum_payment × months_in_step, balance + interest)
    balance  = max(balance + interest − payment, 0)

    Parameters
    ----------
    liability : Liability
        Debt at the start of the step.
    step_years : float
        Step length in years.

    Returns
    -------
    AmortizationStep
    """
    balance = safe_float(liability.balance)
    interest = balance * (growth_factor(liability.interest_rate, step_years) - 1.0)
    owed = balance + interest
    due = safe_float(liability.minimum_payment) * step_years * MONTHS_PER_YEAR
    payment = max(min(due, owed), 0.0)
    return AmortizationStep(
        interest=interest,
        payment=payment,
        balance=max(owed - payment, 0.0),
    )
