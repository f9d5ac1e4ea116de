"""WardStream management CLI.

Creates and drops the ward/bed schema on SQL providers and seeds the
default ward layout.

Usage:
    python src/manage.py setup-db   # Create all tables
    python src/manage.py drop-db    # Drop all tables
    python src/manage.py seed       # Create the default wards
"""

import argparse
import sys


def _domain():
    from inpatient.domain import inpatient

    inpatient.init()
    return inpatient


def setup_database():
    from inpatient.utils.db import setup_db

    domain = _domain()
    print("Creating inpatient database schema...")
    providers = setup_db(domain)
    if not providers:
        print("  No SQL provider configured; nothing to create.")
    else:
        print(f"  Schema ready on: {', '.join(providers)}")
    print("Done.")


def drop_database():
    from inpatient.utils.db import drop_db

    domain = _domain()
    print("Dropping inpatient database schema...")
    providers = drop_db(domain)
    if not providers:
        print("  No SQL provider configured; nothing to drop.")
    else:
        print(f"  Schema dropped on: {', '.join(providers)}")
    print("Done.")


def seed():
    from inpatient.utils.seed import seed_wards

    domain = _domain()
    with domain.domain_context():
        created = seed_wards()
    print(f"Seeded {len(created)} ward(s): {', '.join(created) or 'none'}")


def main(argv=None):
    parser = argparse.ArgumentParser(description="WardStream database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")
    subparsers.add_parser("seed", help="Create the default wards and beds")

    args = parser.parse_args(argv)

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "seed":
        seed()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
