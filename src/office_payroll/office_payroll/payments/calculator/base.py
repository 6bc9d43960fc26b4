from __future__ import annotations

from abc import ABC, abstractmethod

from ..model import Payment, PaymentBreakdown


class PaymentCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def breakdown(self, payment: Payment) -> PaymentBreakdown:
        raise NotImplementedError
