"""Account aggregate — the marketplace role held by a registered user.

Credentials and sessions belong to the identity collaborator; an Account
only records who the user is on the marketplace and which role they act in.

Roles form a closed set. Registration can only produce Buyer or Seller
accounts; every later change must be an edge of `_ROLE_CHANGES`:

    Seller → Buyer        (seller registration rejected)
    Buyer  → Authorizer   (granted by an operator)
"""

from datetime import UTC, datetime
from enum import Enum

from protean.fields import DateTime, String

from marketplace.domain import marketplace
from marketplace.errors import InvalidInput, InvalidTransition


class Role(Enum):
    BUYER = "Buyer"
    SELLER = "Seller"
    AUTHORIZER = "Authorizer"

    @classmethod
    def parse(cls, value):
        """Resolve a role from its value, case-insensitively."""
        if isinstance(value, cls):
            return value
        for role in cls:
            if isinstance(value, str) and role.value.lower() == value.strip().lower():
                return role
        raise InvalidInput(f"Unknown role: {value!r}")


_SELF_SERVICE_ROLES = {Role.BUYER, Role.SELLER}

_ROLE_CHANGES = {
    (Role.SELLER, Role.BUYER),
    (Role.BUYER, Role.AUTHORIZER),
}


@marketplace.aggregate
class Account:
    username = String(required=True, max_length=100)
    email = String(required=True, max_length=254, unique=True)
    role = String(choices=Role, default=Role.BUYER.value)
    registered_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def register(cls, username, email, role):
        from marketplace.account.events import AccountRegistered

        if not username or not username.strip():
            raise InvalidInput("Username is required")
        if not email or not email.strip():
            raise InvalidInput("Email is required")

        requested = Role.parse(role)
        if requested not in _SELF_SERVICE_ROLES:
            raise InvalidInput(f"Accounts cannot register as {requested.value}")

        now = datetime.now(UTC)
        account = cls(
            username=username.strip(),
            email=email.strip().lower(),
            role=requested.value,
            registered_at=now,
            updated_at=now,
        )
        account.raise_(
            AccountRegistered(
                account_id=account.id,
                username=account.username,
                email=account.email,
                role=account.role,
                registered_at=now,
            )
        )
        return account

    def _change_role(self, new_role, reason):
        from marketplace.account.events import AccountRoleChanged

        current = Role(self.role)
        if (current, new_role) not in _ROLE_CHANGES:
            raise InvalidTransition(f"Role cannot change from {current.value} to {new_role.value}")

        now = datetime.now(UTC)
        self.role = new_role.value
        self.updated_at = now
        self.raise_(
            AccountRoleChanged(
                account_id=self.id,
                previous_role=current.value,
                new_role=new_role.value,
                reason=reason,
                changed_at=now,
            )
        )

    def demote_to_buyer(self):
        """Permanently demote a seller whose registration was rejected."""
        self._change_role(Role.BUYER, reason="Seller registration rejected")

    def grant_authorizer(self):
        self._change_role(Role.AUTHORIZER, reason="Granted by operator")
