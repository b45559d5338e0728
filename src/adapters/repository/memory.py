"""
In-memory repository adapter - Implements AccountRepository protocol.

Used by the unit tests and by the `memory` repository backend for local
runs without PostgreSQL. Enforces email uniqueness like the database.
"""

import logging
import threading
import uuid
from dataclasses import fields, replace
from datetime import datetime, timezone
from typing import Any

from src.domain.exceptions import EmailAlreadyClaimed
from src.domain.ports import Account, AccountStatus

logger = logging.getLogger(__name__)

_FILTERABLE = {f.name for f in fields(Account)}


def _check_filters(filters: dict[str, Any]) -> None:
    unknown = set(filters) - _FILTERABLE
    if unknown:
        raise ValueError(f"Unknown account filter(s): {sorted(unknown)}")


class InMemoryAccountRepository:
    """Dict-backed account store keyed by id."""

    def __init__(self) -> None:
        self._accounts: dict[str, Account] = {}
        self._lock = threading.Lock()

    def create(self, account: Account) -> Account:
        logger.info("Saving account %s", account.email)
        now = datetime.now(timezone.utc)
        with self._lock:
            if any(a.email == account.email for a in self._accounts.values()):
                raise EmailAlreadyClaimed(account.email)
            stored = replace(account, id=str(uuid.uuid4()), created_at=now, updated_at=now)
            self._accounts[stored.id] = stored
        return stored

    def exists(self, **filters: Any) -> bool:
        return self.find_one(**filters) is not None

    def find_one(self, **filters: Any) -> Account | None:
        matches = self.find_all(**filters)
        return matches[0] if matches else None

    def find_all(self, **filters: Any) -> list[Account]:
        _check_filters(filters)
        with self._lock:
            return [
                account
                for account in self._accounts.values()
                if all(getattr(account, key) == value for key, value in filters.items())
            ]

    def update(self, account: Account) -> Account:
        logger.info("Updating account %s", account.email)
        with self._lock:
            current = self._accounts.get(account.id)
            if current is None:
                raise KeyError(f"Account {account.id} does not exist")
            if (
                current.status == AccountStatus.EMAIL_VALIDATED
                and account.status != AccountStatus.EMAIL_VALIDATED
            ):
                raise ValueError(f"Account {account.id} cannot move back to {account.status.value}")
            stored = replace(account, updated_at=datetime.now(timezone.utc))
            self._accounts[stored.id] = stored
        return stored

    def delete_all(self) -> None:
        logger.info("Deleting all accounts")
        with self._lock:
            self._accounts.clear()
