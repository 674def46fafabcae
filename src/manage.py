"""OpinaLocal management CLI.

Usage:
    python src/manage.py setup-db               # Create all tables
    python src/manage.py drop-db                # Drop all tables
    python src/manage.py seed                   # Install categories, admin and samples
    python src/manage.py make-admin <email>     # Promote an existing user
"""

import argparse
import sys


def _domain():
    from opinalocal.domain import opinalocal

    opinalocal.init()
    return opinalocal


def setup_database():
    from opinalocal.utils.db import setup_db

    domain = _domain()
    print("Creating opinalocal database schema...")
    setup_db(domain)
    print("Schema ready.")


def drop_database():
    from opinalocal.utils.db import drop_db

    domain = _domain()
    print("Dropping opinalocal database schema...")
    drop_db(domain)
    print("Schema dropped.")


def seed_database():
    from opinalocal.seed import seed

    domain = _domain()
    with domain.domain_context():
        summary = seed()

    print(f"Categories created: {summary['categories']}")
    print(f"Admin user: {summary['admin_id']}")
    print(f"Sample restaurants created: {summary['restaurants']}")
    print("Seeding completed.")


def make_admin(email):
    """Return 0 on success, 1 when no user has ``email``."""
    from protean.utils.globals import current_domain

    from opinalocal.user.queries import find_user_by_email
    from opinalocal.user.user import User

    domain = _domain()
    with domain.domain_context():
        user = find_user_by_email(email)
        if user is None:
            print(f"No user with email {email}")
            return 1

        user.grant_admin()
        current_domain.repository_for(User).add(user)

    print(f"{email} is now an administrator.")
    return 0


def main():
    parser = argparse.ArgumentParser(description="OpinaLocal management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")
    subparsers.add_parser("seed", help="Install default categories, an admin user and sample data")

    admin_parser = subparsers.add_parser("make-admin", help="Grant the administrator role to a user")
    admin_parser.add_argument("email", help="Email of an existing user")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "seed":
        seed_database()
    elif args.command == "make-admin":
        sys.exit(make_admin(args.email))
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
