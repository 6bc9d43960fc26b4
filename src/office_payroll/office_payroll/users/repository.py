from __future__ import annotations

from typing import Optional, Protocol

from .model import Account


class AccountRepository(Protocol):
    def get_by_id(self, account_id: str) -> Optional[Account]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Account]:
        raise NotImplementedError

    def create(self, *, account_id: str, email: str, password_hash: str) -> str:
        raise NotImplementedError

    def set_password_hash(self, account_id: str, password_hash: str) -> bool:
        raise NotImplementedError
