"""Storefront database management CLI.

Usage:
    python src/manage.py setup-db                      # Create all tables
    python src/manage.py drop-db                       # Drop all tables
    python src/manage.py create-admin --email a@b.c --password secret
"""

import argparse
import sys

from protean.exceptions import ProteanException


def setup_database():
    from shared.database import setup_db
    from shared.domain import init_domain

    print("Initializing storefront domain...")
    domain = init_domain()
    print("Creating database schema...")
    setup_db(domain)
    print("Done.")


def drop_database():
    from shared.database import drop_db
    from shared.domain import init_domain

    print("Initializing storefront domain...")
    domain = init_domain()
    print("Dropping database schema...")
    drop_db(domain)
    print("Done.")


def create_admin(email, password, name):
    from identity.user.registration import ensure_admin
    from shared.database import setup_db
    from shared.domain import init_domain
    from shared.errors import first_message

    domain = init_domain()
    setup_db(domain)
    with domain.domain_context():
        try:
            user = ensure_admin(email, password, name=name)
        except ProteanException as exc:
            print(f"Could not create admin: {first_message(exc.messages)}", file=sys.stderr)
            sys.exit(1)
    print(f"Admin account ready: {user.email} (id={user.id})")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Storefront database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    admin_parser = subparsers.add_parser("create-admin", help="Create the admin account if it does not exist")
    admin_parser.add_argument("--email", required=True)
    admin_parser.add_argument("--password", required=True)
    admin_parser.add_argument("--name", default="Admin User")

    args = parser.parse_args(argv)

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "create-admin":
        create_admin(args.email, args.password, args.name)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
