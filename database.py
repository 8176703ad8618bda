"""
Database connection

Exposes a pymongo database handle built from the DATABASE_URL and
DATABASE_NAME environment variables, plus a couple of small helpers.
`db` stays None when the environment is not configured.
"""

import os
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel
from pymongo import MongoClient
from pymongo.database import Database

DATABASE_URL = os.getenv("DATABASE_URL")
DATABASE_NAME = os.getenv("DATABASE_NAME")

db: Optional[Database] = None

if DATABASE_URL and DATABASE_NAME:
    client = MongoClient(DATABASE_URL)
    db = client[DATABASE_NAME]


def _require_db(database: Optional[Database]) -> Database:
    database = database if database is not None else db
    if database is None:
        raise RuntimeError("Database not configured")
    return database


def create_document(collection_name: str, data: Union[BaseModel, Dict[str, Any]], database: Optional[Database] = None) -> str:
    """Insert a document and return its id as a string."""
    database = _require_db(database)
    if isinstance(data, BaseModel):
        data_dict = data.model_dump()
    else:
        data_dict = dict(data)
    data_dict.setdefault("created_at", datetime.now(timezone.utc))
    result = database[collection_name].insert_one(data_dict)
    return str(result.inserted_id)


def get_documents(collection_name: str, filter_dict: Optional[Dict[str, Any]] = None, limit: Optional[int] = None, database: Optional[Database] = None) -> List[Dict[str, Any]]:
    database = _require_db(database)
    cursor = database[collection_name].find(filter_dict or {})
    if limit:
        cursor = cursor.limit(limit)
    return list(cursor)
