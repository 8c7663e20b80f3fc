"""
Reset the contacts collection to a fixed set of sample contacts.

Every run deletes all existing contacts first. Run with ``contacts-seed`` or
``python -m contacts_api.seed``.
"""

import logging
import sys

from pymongo.database import Database

from . import crud
from .config import setup_logging
from .database import DatabaseManager
from .errors import ContactAPIError
from .schemas import ContactIn

logger = logging.getLogger(__name__)

SAMPLE_CONTACTS = [
    ContactIn(first_name="John", last_name="Doe", email="john.doe@example.com",
              favorite_color="Blue", birthday="1990-01-15"),
    ContactIn(first_name="Jane", last_name="Smith", email="jane.smith@example.com",
              favorite_color="Green", birthday="1985-05-22"),
    ContactIn(first_name="Alice", last_name="Johnson", email="alice.johnson@example.com",
              favorite_color="Red", birthday="1992-09-10"),
    ContactIn(first_name="Bob", last_name="Wilson", email="bob.wilson@example.com",
              favorite_color="Yellow", birthday="1988-07-03"),
    ContactIn(first_name="Sarah", last_name="Davis", email="sarah.davis@example.com",
              favorite_color="Purple", birthday="1993-12-28"),
]


def seed_contacts(db: Database) -> int:
    logger.info("Clearing existing contacts and inserting sample contacts...")
    inserted = crud.replace_all_contacts(db, SAMPLE_CONTACTS)
    logger.info(f"{inserted} contacts were successfully inserted.")
    return inserted


def main(db_manager: DatabaseManager | None = None) -> int:
    db_manager = db_manager or DatabaseManager()
    try:
        logger.info("Connecting to database for seeding...")
        seed_contacts(db_manager.connect())
    except ContactAPIError as e:
        logger.error(f"Error during contact seeding: {e.message} ({e.error})")
        return 1
    finally:
        db_manager.close()
    return 0


def cli():
    setup_logging()
    sys.exit(main())


if __name__ == "__main__":
    cli()
