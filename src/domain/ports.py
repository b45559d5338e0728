"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the account entity and the interfaces (ports) that
the domain requires from infrastructure. Adapters implement these
protocols via structural subtyping.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Protocol


class AccountStatus(str, Enum):
    """
    Account lifecycle states.

    State Transitions (forward-only):
    - AWAITING_VALIDATION -> EMAIL_VALIDATED (successful code validation)

    EMAIL_VALIDATED is terminal. No operation moves an account back to
    AWAITING_VALIDATION.
    """

    AWAITING_VALIDATION = "AWAITING_VALIDATION"
    EMAIL_VALIDATED = "EMAIL_VALIDATED"

    @property
    def label(self) -> str:
        """Human readable form, e.g. 'Awaiting Validation'."""
        return " ".join(word.capitalize() for word in self.value.split("_"))


@dataclass(frozen=True)
class Account:
    """
    Registered identity.

    Immutable: status transitions build a replacement instance with
    dataclasses.replace() and persist it through the repository.
    id, created_at and updated_at are assigned by storage.
    """

    name: str
    email: str
    phone: str
    password_hash: str
    status: AccountStatus = AccountStatus.AWAITING_VALIDATION
    id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class MailMessage:
    """Outgoing email envelope."""

    sender: str
    to: str
    subject: str
    body: str


class AccountRepository(Protocol):
    """Port interface for account persistence."""

    def create(self, account: Account) -> Account:
        """
        Persist a new account.

        Args:
            account: Account without id/timestamps

        Returns:
            The stored account with id and timestamps assigned

        Raises:
            EmailAlreadyClaimed: If the email violates the uniqueness constraint
        """
        ...

    def exists(self, **filters: Any) -> bool:
        """Return True if an account matches all filters (e.g. email=...)."""
        ...

    def find_one(self, **filters: Any) -> Account | None:
        """Return the account matching all filters, or None."""
        ...

    def find_all(self, **filters: Any) -> list[Account]:
        """Return every account matching all filters."""
        ...

    def update(self, account: Account) -> Account:
        """
        Save an account replacement (matched by id).

        Returns:
            The stored account with a refreshed updated_at
        """
        ...

    def delete_all(self) -> None:
        """Remove every account. Test support only."""
        ...


class EmailSender(Protocol):
    """Port interface for email delivery."""

    def send(self, message: MailMessage) -> bool:
        """
        Deliver an email.

        Returns:
            True if the message was handed to the transport, False otherwise
        """
        ...


class CodeCache(Protocol):
    """Port interface for the ephemeral verification code store."""

    def set(self, key: str, value: str, ttl_seconds: int) -> bool:
        """Store value under key for ttl_seconds. Last write wins."""
        ...

    def get(self, key: str) -> str | None:
        """Return the live value for key, or None if absent or expired."""
        ...

    def clear(self) -> None:
        """Drop every entry."""
        ...
