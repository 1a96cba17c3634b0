"""
Database helpers

Connection handling and small document helpers around pymongo. The API and the
seed routine both receive an explicit database handle from `connect` instead of
sharing a module-level global.
"""

import os
import logging
from datetime import date, datetime, time, timezone
from typing import Any, Dict, List, Optional, Union

from bson import ObjectId
from dotenv import load_dotenv
from fastapi import Request
from pydantic import BaseModel
from pymongo import ASCENDING, MongoClient
from pymongo.database import Database

load_dotenv()

logger = logging.getLogger(__name__)

DATABASE_URL = os.getenv("MONGO_URI") or os.getenv("DATABASE_URL") or "mongodb://localhost:27017"
DATABASE_NAME = os.getenv("DATABASE_NAME", "hotels")


def connect(url: Optional[str] = None, name: Optional[str] = None) -> Database:
    """Open a client and return the configured database handle."""
    client = MongoClient(url or DATABASE_URL)
    db = client[name or DATABASE_NAME]
    logger.info("Connected to MongoDB database %s", db.name)
    return db


def close(db: Database) -> None:
    db.client.close()
    logger.info("MongoDB connection closed")


def ensure_indexes(db: Database) -> None:
    db["user"].create_index([("email", ASCENDING)], unique=True)
    logger.debug("Indexes ensured")


def get_db(request: Request) -> Database:
    return request.app.state.db


def object_id(value: str) -> ObjectId:
    # raises bson.errors.InvalidId for malformed ids
    return ObjectId(value)


def _to_bson(value: Any) -> Any:
    # BSON stores datetimes only, so plain dates become midnight UTC
    if isinstance(value, date) and not isinstance(value, datetime):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)
    if isinstance(value, dict):
        return {k: _to_bson(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_to_bson(v) for v in value]
    return value


def to_document(data: Union[BaseModel, dict]) -> Dict[str, Any]:
    if isinstance(data, BaseModel):
        data_dict = data.model_dump(exclude_none=True)
    else:
        data_dict = dict(data)
    return _to_bson(data_dict)


def create_document(db: Database, collection_name: str, data: Union[BaseModel, dict]) -> str:
    """Insert a single document and return its id as a string."""
    result = db[collection_name].insert_one(to_document(data))
    return str(result.inserted_id)


def create_documents(db: Database, collection_name: str, items: List[Union[BaseModel, dict]]) -> List[str]:
    """Insert documents in order and return their ids as strings, in the same order."""
    result = db[collection_name].insert_many([to_document(i) for i in items])
    return [str(i) for i in result.inserted_ids]


def get_documents(db: Database, collection_name: str) -> List[dict]:
    return list(db[collection_name].find())


def serialize_doc(doc):
    """Convert Mongo `_id` to a string `id`."""
    if doc is None:
        return None
    doc = dict(doc)
    if doc.get("_id"):
        doc["id"] = str(doc.pop("_id"))
    return doc
