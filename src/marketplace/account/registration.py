"""Account registration — command and handler."""

from protean import handle
from protean.fields import String
from protean.utils.globals import current_domain

from marketplace.account.account import Account, Role
from marketplace.account.approval import SellerApproval
from marketplace.domain import marketplace
from marketplace.errors import AlreadyExists


@marketplace.command(part_of="Account")
class RegisterAccount:
    """Open a buyer or seller account. Sellers start with a pending approval."""

    username = String(required=True, max_length=100)
    email = String(required=True, max_length=254)
    role = String(required=True, max_length=20)


@marketplace.command_handler(part_of=Account)
class RegisterAccountHandler:
    @handle(RegisterAccount)
    def register_account(self, command):
        accounts = current_domain.repository_for(Account)
        if accounts.with_email(command.email) is not None:
            raise AlreadyExists("Email already exists")

        account = Account.register(
            username=command.username,
            email=command.email,
            role=command.role,
        )
        accounts.add(account)

        if account.role == Role.SELLER.value:
            current_domain.repository_for(SellerApproval).add(SellerApproval.request(account.id))

        return str(account.id)
