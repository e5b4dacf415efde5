# FILE: backend/secondbrain/core/db.py
# 1. Connection is opened by the application lifespan, not at import time.
# 2. 'get_db' is the single dependency provider; tests override it.

import pymongo
from pymongo.database import Database
from pymongo.mongo_client import MongoClient
from pymongo.errors import ConnectionFailure
from urllib.parse import urlparse
from typing import Generator, Tuple, Optional
import logging

from .config import settings

logger = logging.getLogger(__name__)

mongo_client: Optional[MongoClient] = None
db_instance: Optional[Database] = None

def _connect_to_mongo() -> Tuple[MongoClient, Database]:
    logger.info("--- [DB] Attempting to connect to MongoDB... ---")
    try:
        client: MongoClient = pymongo.MongoClient(settings.DATABASE_URI, serverSelectionTimeoutMS=5000, tz_aware=True)
        client.admin.command('ping')
        db_name = urlparse(settings.DATABASE_URI).path.lstrip('/')
        if not db_name:
            raise ValueError("Database name not found in DATABASE_URI.")
        db: Database = client[db_name]
        logger.info(f"--- [DB] Successfully connected to MongoDB: '{db_name}' ---")
        return client, db
    except (ConnectionFailure, ValueError) as e:
        logger.critical(f"--- [DB] Could not connect to MongoDB: {e} ---")
        raise

def connect_to_mongo() -> Database:
    global mongo_client, db_instance
    if db_instance is not None:
        return db_instance
    mongo_client, db_instance = _connect_to_mongo()
    return db_instance

# --- Dependency Providers ---
def get_db() -> Generator[Database, None, None]:
    if db_instance is None:
        raise RuntimeError("Database is not connected. Check application lifespan.")
    yield db_instance

# --- Shutdown Logic ---
def close_mongo_connection():
    global mongo_client, db_instance
    if mongo_client is not None:
        mongo_client.close()
        logger.info("--- [DB] MongoDB connection closed. ---")
    mongo_client = None
    db_instance = None
