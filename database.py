"""
Database Helper Functions

MongoDB helper functions used by the routers. Every helper takes the database
handle explicitly; the handle is created once by connect() and stored on the
application state.
"""

import logging
from datetime import datetime, timezone
from typing import Union, Optional, Dict, Any

from bson import ObjectId
from pymongo import ASCENDING, MongoClient, ReturnDocument
from pymongo.database import Database
from pydantic import BaseModel

from config import Settings

logger = logging.getLogger(__name__)

UNIQUE_INDEXES = {
    "genre": "name",
    "movie": "title",
    "user": "email",
}


def connect(settings: Settings) -> Database:
    client = MongoClient(settings.database_url)
    return client[settings.database_name]


def ensure_indexes(db: Database) -> None:
    for collection_name, field in UNIQUE_INDEXES.items():
        db[collection_name].create_index([(field, ASCENDING)], unique=True)
        logger.debug("Ensured unique index on %s.%s", collection_name, field)


def to_object_id(doc_id: Union[str, ObjectId]) -> Optional[ObjectId]:
    if isinstance(doc_id, ObjectId):
        return doc_id
    if isinstance(doc_id, str) and ObjectId.is_valid(doc_id):
        return ObjectId(doc_id)
    return None


def serialize(doc: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """Convert a stored document into a JSON-friendly dict.

    ``_id`` keys become ``id`` strings, including those of embedded snapshots.
    """
    if doc is None:
        return None
    d = {}
    for key, value in doc.items():
        if key == "_id":
            d["id"] = str(value)
        elif isinstance(value, ObjectId):
            d[key] = str(value)
        elif isinstance(value, dict):
            d[key] = serialize(value)
        else:
            d[key] = value
    return d


def create_document(db: Database, collection_name: str, data: Union[BaseModel, dict]) -> str:
    """Insert a single document with timestamps"""
    # Convert Pydantic model to dict if needed
    if isinstance(data, BaseModel):
        data_dict = data.model_dump(by_alias=True, exclude_none=True)
    else:
        data_dict = data.copy()

    now = datetime.now(timezone.utc)
    data_dict['created_at'] = now
    data_dict['updated_at'] = now

    result = db[collection_name].insert_one(data_dict)
    return str(result.inserted_id)


def get_documents(db: Database, collection_name: str, filter_dict: Optional[dict] = None, limit: Optional[int] = None, sort: Optional[list] = None):
    """Get documents from collection"""
    cursor = db[collection_name].find(filter_dict or {})
    if sort:
        cursor = cursor.sort(sort)
    if limit:
        cursor = cursor.limit(limit)
    return list(cursor)


def get_document_by_id(db: Database, collection_name: str, doc_id: Union[str, ObjectId]) -> Optional[Dict[str, Any]]:
    """Get a single document by _id, None for unknown or malformed ids"""
    oid = to_object_id(doc_id)
    if oid is None:
        return None
    return db[collection_name].find_one({"_id": oid})


def replace_document(db: Database, collection_name: str, doc_id: Union[str, ObjectId], data: Union[BaseModel, dict]) -> Optional[Dict[str, Any]]:
    """Overwrite every mutable field of a document and return the new version"""
    oid = to_object_id(doc_id)
    if oid is None:
        return None
    if isinstance(data, BaseModel):
        data = data.model_dump(by_alias=True, exclude_none=True)
    else:
        data = data.copy()
    data['updated_at'] = datetime.now(timezone.utc)
    return db[collection_name].find_one_and_update(
        {"_id": oid},
        {"$set": data},
        return_document=ReturnDocument.AFTER,
    )


def delete_document(db: Database, collection_name: str, doc_id: Union[str, ObjectId]) -> Optional[Dict[str, Any]]:
    """Delete a document by id and return what was removed"""
    oid = to_object_id(doc_id)
    if oid is None:
        return None
    return db[collection_name].find_one_and_delete({"_id": oid})


def increment_field(db: Database, collection_name: str, doc_id: Union[str, ObjectId], field: str, amount: int = 1) -> bool:
    """Atomically add amount to a numeric field; False if no document matched"""
    oid = to_object_id(doc_id)
    if oid is None:
        return False
    res = db[collection_name].update_one(
        {"_id": oid},
        {"$inc": {field: amount}, "$set": {"updated_at": datetime.now(timezone.utc)}},
    )
    return res.matched_count > 0
