import logging

from pymongo.database import Database
from pymongo.errors import PyMongoError

from . import models, schemas
from .errors import NotFoundError, PersistenceError

logger = logging.getLogger(__name__)


def _persistence_error(action: str, exc: PyMongoError) -> PersistenceError:
    logger.error(f"Error {action}: {exc}")
    return PersistenceError(f"Error {action}", str(exc))


def get_contacts(db: Database) -> list[dict]:
    try:
        documents = list(models.contacts(db).find())
    except PyMongoError as e:
        raise _persistence_error("fetching all contacts", e) from e
    return [models.to_response(doc) for doc in documents]


def get_contact(db: Database, contact_id: str) -> dict:
    object_id = models.parse_object_id(contact_id)
    try:
        document = models.contacts(db).find_one({"_id": object_id})
    except PyMongoError as e:
        raise _persistence_error("fetching single contact", e) from e
    if document is None:
        raise NotFoundError("Contact not found")
    return models.to_response(document)


def create_contact(db: Database, contact: schemas.ContactIn) -> str:
    try:
        result = models.contacts(db).insert_one(contact.model_dump(by_alias=True))
    except PyMongoError as e:
        raise _persistence_error("creating contact", e) from e
    return str(result.inserted_id)


def update_contact(db: Database, contact_id: str, contact: schemas.ContactIn) -> None:
    """Overwrite all five fields. A match with no changes still counts as success."""
    object_id = models.parse_object_id(contact_id)
    try:
        result = models.contacts(db).update_one(
            {"_id": object_id}, {"$set": contact.model_dump(by_alias=True)})
    except PyMongoError as e:
        raise _persistence_error("updating contact", e) from e
    if result.matched_count == 0:
        raise NotFoundError("Contact not found")


def delete_contact(db: Database, contact_id: str) -> None:
    object_id = models.parse_object_id(contact_id)
    try:
        result = models.contacts(db).delete_one({"_id": object_id})
    except PyMongoError as e:
        raise _persistence_error("deleting contact", e) from e
    if result.deleted_count == 0:
        raise NotFoundError("Contact not found")


def replace_all_contacts(db: Database, contacts: list[schemas.ContactIn]) -> int:
    """Delete every contact, then insert ``contacts``. Returns the inserted count."""
    collection = models.contacts(db)
    try:
        collection.delete_many({})
        result = collection.insert_many([c.model_dump(by_alias=True) for c in contacts])
    except PyMongoError as e:
        raise _persistence_error("seeding contacts", e) from e
    return len(result.inserted_ids)
