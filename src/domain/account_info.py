"""Account info domain service - Look up the authenticated account."""

from dataclasses import dataclass

from .errors import DomainError, not_found
from .ports import Account, AccountRepository
from .result import Failure, Result, Success


@dataclass
class GetAccountInfoService:
    repository: AccountRepository

    def get(self, account_id: str) -> Result[DomainError, Account]:
        account = self.repository.find_one(id=account_id)
        if account is None:
            return Failure(not_found(account_id))
        return Success(account)
