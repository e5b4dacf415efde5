# FILE: backend/secondbrain/core/lifespan.py
# 1. Connects MongoDB and creates indexes on startup.
# 2. Closes the DB connection and the metadata HTTP client on shutdown.

from contextlib import asynccontextmanager
from fastapi import FastAPI
import logging
from pymongo import ASCENDING, DESCENDING
from pymongo.database import Database
from pymongo.errors import PyMongoError

from .db import connect_to_mongo, close_mongo_connection
from ..services.summary_service import get_summary_provider

logger = logging.getLogger(__name__)

def create_mongo_indexes(db: Database):
    try:
        logger.info("--- [Lifespan] Verifying database indexes... ---")

        db.users.create_index([("email", ASCENDING)], unique=True)
        db.users.create_index([("username", ASCENDING)], unique=True)
        db.otps.create_index([("user_id", ASCENDING), ("purpose", ASCENDING), ("created_at", DESCENDING)])

        # Owner dashboard: filter by owner (+source), newest first
        db.contents.create_index([("user_id", ASCENDING), ("created_at", DESCENDING)])
        db.contents.create_index([("user_id", ASCENDING), ("source", ASCENDING), ("created_at", DESCENDING)])
        # Per-owner duplicate check and cross-owner summary reuse
        db.contents.create_index([("user_id", ASCENDING), ("link", ASCENDING)])
        db.contents.create_index([("link", ASCENDING), ("summary", ASCENDING)])

        db.sources.create_index([("name", ASCENDING)], unique=True)
        db.tags.create_index([("title", ASCENDING)], unique=True)

        db.links.create_index([("hash", ASCENDING)], unique=True)
        db.links.create_index([("user_id", ASCENDING), ("content_id", ASCENDING)])

        logger.info("--- [Lifespan] ✅ Database indexes verified/created. ---")
    except PyMongoError as e:
        logger.error(f"--- [Lifespan] ❌ Index creation failed: {e} ---")

def perform_shutdown():
    logger.info("--- [Lifespan] Application shutdown sequence initiated. ---")
    get_summary_provider().close()
    close_mongo_connection()
    logger.info("--- [Lifespan] All connections closed gracefully. Shutdown complete. ---")

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("--- [Lifespan] Application startup sequence initiated. ---")

    db = connect_to_mongo()
    app.state.mongo_db = db
    create_mongo_indexes(db)

    logger.info("--- [Lifespan] All resources initialized. Application is ready. ---")

    yield

    perform_shutdown()
