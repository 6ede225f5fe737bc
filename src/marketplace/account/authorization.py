"""Authorizer role assignment — command and handler.

Authorizers are never self-registered. An operator grants the role to an
existing buyer account through the management CLI.
"""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from marketplace.account.account import Account
from marketplace.domain import marketplace


@marketplace.command(part_of="Account")
class GrantAuthorizerRole:
    account_id = Identifier(required=True)


@marketplace.command_handler(part_of=Account)
class GrantAuthorizerRoleHandler:
    @handle(GrantAuthorizerRole)
    def grant_authorizer_role(self, command):
        repo = current_domain.repository_for(Account)
        account = repo.get(command.account_id)
        account.grant_authorizer()
        repo.add(account)
