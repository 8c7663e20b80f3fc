from bson import ObjectId
from pymongo.collection import Collection
from pymongo.database import Database

from .errors import ValidationError

CONTACTS_COLLECTION = "contacts"

CONTACT_FIELDS = ("firstName", "lastName", "email", "favoriteColor", "birthday")


def contacts(db: Database) -> Collection:
    return db[CONTACTS_COLLECTION]


def parse_object_id(contact_id: str) -> ObjectId:
    # ObjectId.is_valid also accepts 12-byte strings; only hex ids come over HTTP
    if len(contact_id) != 24 or not ObjectId.is_valid(contact_id):
        raise ValidationError("Invalid Contact ID format")
    return ObjectId(contact_id)


def to_response(document: dict) -> dict:
    """Stored document -> JSON-ready contact with a string ``_id``."""
    result = {"_id": str(document["_id"])}
    for field in CONTACT_FIELDS:
        value = document.get(field)
        result[field] = "" if value is None else value
    return result
