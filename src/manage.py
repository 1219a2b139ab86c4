"""Brewery database management CLI.

Creates and drops the relational schema for the brewery domain using the
setup_db/drop_db utilities. Only relational providers (sqlite, postgresql)
are affected; the in-memory store needs no schema.

Usage:
    python src/manage.py setup-db   # Create all tables
    python src/manage.py drop-db    # Drop all tables
"""

import argparse
import sys


def setup_database():
    """Create the database schema for the brewery domain."""
    from brewery.domain import brewery
    from brewery.utils.db import setup_db

    print("Initializing brewery domain...")
    brewery.init()
    print("Creating brewery database schema...")
    setup_db(brewery)
    print("Done.")


def drop_database():
    """Drop the database schema for the brewery domain."""
    from brewery.domain import brewery
    from brewery.utils.db import drop_db

    print("Initializing brewery domain...")
    brewery.init()
    print("Dropping brewery database schema...")
    drop_db(brewery)
    print("Done.")


def main():
    parser = argparse.ArgumentParser(description="Brewery database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
