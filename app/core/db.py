# app/core/db.py

from fastapi import Depends, Request
from pymongo import AsyncMongoClient
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.asynchronous.database import AsyncDatabase

from app.core.config import (
    MONGODB_URI,
    MONGODB_DB,
    MONGODB_TIMEOUT_MS,
    COMPLAINTS_COLLECTION,
    APP_NAME,
)

# =====================================================
# CLIENT
# =====================================================
def create_mongo_client() -> AsyncMongoClient:
    # Lazy: no connection is made until the first operation.
    return AsyncMongoClient(
        MONGODB_URI,
        appname=APP_NAME,
        serverSelectionTimeoutMS=MONGODB_TIMEOUT_MS,
        tz_aware=True,
    )

# =====================================================
# DEPENDENCIES
# =====================================================
def get_db(request: Request) -> AsyncDatabase:
    db = getattr(request.app.state, "mongo_db", None)
    if db is None:
        raise RuntimeError("MongoDB client is not initialised")
    return db


def get_complaints_collection(
    db: AsyncDatabase = Depends(get_db),
) -> AsyncCollection:
    return db[COMPLAINTS_COLLECTION]
