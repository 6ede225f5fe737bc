"""Marketplace management CLI.

Usage:
    python src/manage.py setup-db                       # Create all tables
    python src/manage.py drop-db                        # Drop all tables
    python src/manage.py grant-authorizer <account_id>  # Promote a buyer to Authorizer
"""

import argparse
import sys


def _domain():
    from marketplace.domain import marketplace

    print("Initializing marketplace domain...")
    marketplace.init()
    return marketplace


def setup_database():
    from marketplace.utils.db import setup_db

    domain = _domain()
    print("Creating marketplace database schema...")
    setup_db(domain)
    print("Done.")


def drop_database():
    from marketplace.utils.db import drop_db

    domain = _domain()
    print("Dropping marketplace database schema...")
    drop_db(domain)
    print("Done.")


def grant_authorizer(account_id):
    from marketplace.errors import MarketplaceError
    from marketplace.workflows import grant_authorizer as grant

    domain = _domain()
    with domain.domain_context():
        try:
            account = grant(account_id)
        except MarketplaceError as exc:
            print(f"Failed: {exc.message}", file=sys.stderr)
            return 1

    print(f"{account.username} <{account.email}> is now {account.role}.")
    return 0


def main():
    parser = argparse.ArgumentParser(description="Marketplace management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    grant_parser = subparsers.add_parser("grant-authorizer", help="Grant the Authorizer role to a buyer account")
    grant_parser.add_argument("account_id", help="Id of an existing Buyer account")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "grant-authorizer":
        sys.exit(grant_authorizer(args.account_id))
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
