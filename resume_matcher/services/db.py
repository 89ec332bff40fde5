from datetime import datetime
from typing import Any, Dict, List, Optional

import motor.motor_asyncio
from pydantic import ValidationError
from pymongo import ASCENDING, DESCENDING
from pymongo.errors import PyMongoError

from resume_matcher.models.models import CandidateRecord
from resume_matcher.utils import settings
from resume_matcher.utils.exceptions import PersistenceError
from resume_matcher.utils.logging_config import get_logger

logger = get_logger(__name__)

logger.info(f"Initializing MongoDB connection to database: {settings.DB_NAME}")

# Initialize client
try:
    client = motor.motor_asyncio.AsyncIOMotorClient(settings.MONGO_DETAILS)
    db = client[settings.DB_NAME]
    logger.info("MongoDB client initialized successfully")
except Exception as e:
    logger.error(f"Failed to initialize MongoDB client: {e}")
    raise

# Collections
resumes_coll = db[settings.RESUME_COLLECTION]


async def init_indexes():
    """Index initialization for the resume collection."""
    logger.info("Starting database index initialization")

    try:
        await resumes_coll.create_index([("upload_date", DESCENDING)])
        await resumes_coll.create_index([("source", ASCENDING)])
        logger.debug("Created indexes on resumes.(upload_date, source)")
        logger.info("Database index initialization completed successfully")
    except PyMongoError as e:
        logger.warning(f"Database index initialization had issues: {e}")
        logger.info("Application will continue without all indexes - some operations may be slower")


def to_document(record: CandidateRecord) -> Dict[str, Any]:
    doc = record.model_dump(exclude={"id"})
    if doc.get("upload_date") is None:
        doc["upload_date"] = datetime.utcnow()
    return doc


def from_document(doc: Dict[str, Any]) -> Optional[CandidateRecord]:
    if not doc:
        return None
    doc = dict(doc)
    doc["id"] = str(doc.pop("_id")) if "_id" in doc else doc.get("id")
    return CandidateRecord.model_validate(doc)


class ResumeStore:
    """Saves and reloads candidate records from MongoDB."""

    def __init__(self, collection=None):
        self.collection = collection if collection is not None else resumes_coll

    async def save(self, record: CandidateRecord) -> str:
        try:
            result = await self.collection.insert_one(to_document(record))
        except PyMongoError as e:
            raise PersistenceError(
                f"Failed to save resume from {record.source}",
                operation="insert_one", collection=settings.RESUME_COLLECTION, cause=e
            ) from e
        record_id = str(result.inserted_id)
        logger.info(f"Saved resume {record.name!r} as {record_id}")
        return record_id

    async def fetch_all(self) -> List[CandidateRecord]:
        try:
            cursor = self.collection.find({}).sort("upload_date", DESCENDING)
            docs = await cursor.to_list(length=None)
        except PyMongoError as e:
            raise PersistenceError(
                "Failed to fetch resumes",
                operation="find", collection=settings.RESUME_COLLECTION, cause=e
            ) from e

        records = []
        for doc in docs:
            try:
                records.append(from_document(doc))
            except ValidationError as e:
                logger.warning(f"Skipping malformed resume document {doc.get('_id')}: {e}")
        logger.info(f"Fetched {len(records)} resumes")
        return records


def get_resume_store() -> ResumeStore:
    return ResumeStore()
