"""Marketplace database management CLI.

Usage:
    python src/manage.py setup-db    # Create all tables
    python src/manage.py drop-db     # Drop all tables
    python src/manage.py seed-demo   # Register a demo organizer with sample catalog
"""

import argparse
import sys

DEMO_ORGANIZER = {
    "email": "demo.organizer@example.com",
    "username": "demo-organizer",
    "organization_name": "Demo Events Co.",
    "mobile_number": "+1-555-0100",
}

DEMO_CATALOG = [
    {
        "name": "Wedding",
        "description": "Complete wedding planning services",
        "package": {
            "title": "Classic Wedding",
            "description": "Ceremony and reception planning for up to 150 guests",
            "price": 5000.0,
            "location": "Garden Venue",
        },
    },
    {
        "name": "Corporate Event",
        "description": "Professional corporate event planning",
        "package": {
            "title": "Conference Day",
            "description": "Full-day conference with catering and AV setup",
            "price": 3500.0,
            "location": "Downtown Convention Center",
        },
    },
    {
        "name": "Birthday Party",
        "description": "Birthday celebration planning",
        "package": {
            "title": "Birthday Bash",
            "description": "Decorations, cake and entertainment for up to 40 guests",
            "price": 800.0,
            "location": "Party Hall",
        },
    },
]


def setup_database():
    from marketplace.domain import marketplace
    from marketplace.utils.db import setup_db

    print("Initializing marketplace domain...")
    marketplace.init()
    print("Creating marketplace database schema...")
    setup_db(marketplace)
    print("Done.")


def drop_database():
    from marketplace.domain import marketplace
    from marketplace.utils.db import drop_db

    print("Initializing marketplace domain...")
    marketplace.init()
    print("Dropping marketplace database schema...")
    drop_db(marketplace)
    print("Done.")


def seed_demo():
    """Register the demo organizer and give it one active package per event type."""
    from marketplace import facade
    from marketplace.domain import marketplace
    from marketplace.identity.directory import to_ref
    from marketplace.identity.user import User

    marketplace.init()
    with marketplace.domain_context():
        existing = marketplace.repository_for(User).find_by_email(DEMO_ORGANIZER["email"])
        if existing is not None:
            print(f"Demo organizer already present ({existing.id}); nothing to do.")
            return

        organizer = to_ref(facade.register_organizer(**DEMO_ORGANIZER))
        print(f"Registered demo organizer {organizer.id}")

        for entry in DEMO_CATALOG:
            event_type = facade.create_event_type(organizer, name=entry["name"], description=entry["description"])
            package = facade.create_event_package(organizer, event_type_id=event_type.id, **entry["package"])
            print(f"  {event_type.name}: package {package.title} ({package.id})")

    print("Done.")


def main():
    parser = argparse.ArgumentParser(description="Marketplace database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")
    subparsers.add_parser("seed-demo", help="Register a demo organizer with sample event types and packages")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "seed-demo":
        seed_demo()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
