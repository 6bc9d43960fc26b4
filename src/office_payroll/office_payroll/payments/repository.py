from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import EntryType
from .model import Payment, PaymentDetail, PaymentEntry


class PaymentRepository(Protocol):
    """Repository interface for payments and their ledger entries.

    Payments returned by the list/get methods carry their entries.
    """

    def list_details(self, employee_ids: Sequence[str], *, month: Optional[date] = None) -> Sequence[PaymentDetail]:
        raise NotImplementedError

    def list_for_month(self, employee_ids: Sequence[str], month: date) -> Sequence[Payment]:
        raise NotImplementedError

    def exists_for_month(self, employee_ids: Sequence[str], month: date) -> bool:
        raise NotImplementedError

    def get_by_id(self, payment_id: str) -> Optional[Payment]:
        raise NotImplementedError

    def create_with_entries(self, payment: Payment) -> str:
        raise NotImplementedError

    def update_with_entries(self, payment: Payment) -> bool:
        """Update the payment row and replace its entries wholesale."""

        raise NotImplementedError

    def delete(self, payment_id: str) -> bool:
        raise NotImplementedError

    def insert_batch(self, payments: Sequence[Payment]) -> None:
        """Insert payments, then all their entries, as one unit."""

        raise NotImplementedError

    def add_entries(self, entries: Sequence[PaymentEntry]) -> int:
        raise NotImplementedError

    def delete_entries(self, payment_ids: Sequence[str], *, title: str, entry_type: EntryType) -> int:
        raise NotImplementedError
