#!/usr/bin/env python3
"""
Create the database tables for the waitlist.

Managed deployments should run `alembic upgrade head` instead; this is the
quick path for a local SQLite file.
"""
import sys
import os

# Add the project root to Python path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from app.core.config import settings
from app.core.database import Base, engine
from app.core.database import SessionLocal
from app.services.subscriber_store import SubscriberStore

# Import all models to ensure they're registered with Base
from app import models  # noqa: F401


def init_database():
    """Create tables and report how many subscribers are already stored"""
    print(f"Creating database tables on {engine.url.render_as_string(hide_password=True)}...")
    Base.metadata.create_all(bind=engine)
    print("Tables created successfully!")

    session = SessionLocal()
    try:
        count = len(SubscriberStore(session).list_all())
        print(f"{count} subscriber(s) on the {settings.SITE_NAME} waitlist")
    finally:
        session.close()


if __name__ == "__main__":
    init_database()
