"""Repository for the Account aggregate."""

from marketplace.account.account import Account
from marketplace.domain import marketplace


@marketplace.repository(part_of=Account)
class AccountRepository:
    def by_ids(self, account_ids) -> dict:
        ids = {str(account_id) for account_id in account_ids}
        if not ids:
            return {}
        accounts = self._dao.query.filter(id__in=list(ids)).limit(len(ids)).all().items
        return {str(account.id): account for account in accounts}

    def with_email(self, email) -> Account | None:
        return self._dao.query.filter(email=str(email).strip().lower()).all().first
