"""
MongoDB Connection Utility

MongoDB stores:
- Resume form documents (one per user)
- AI skill-gap / coaching reports

WHY MongoDB for these?
- Schema-flexible: resume sections and AI outputs vary in structure
- Document-oriented: a resume is one self-contained document
- No joins needed
"""
import logging

from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.database import Database
from pymongo.collection import Collection
from sensai.core.config import get_settings

settings = get_settings()
logger = logging.getLogger(__name__)

# Global client (connection pooling handled internally by pymongo)
_client: MongoClient = None
_db: Database = None


def get_mongo_client() -> MongoClient:
    """Get or create MongoDB client (singleton pattern)"""
    global _client
    if _client is None:
        _client = MongoClient(settings.mongodb_uri)
    return _client


def get_mongo_db() -> Database:
    """Get the sensai_docs database"""
    global _db
    if _db is None:
        client = get_mongo_client()
        _db = client[settings.mongodb_db]
    return _db


def get_collection(name: str) -> Collection:
    """
    Get a specific collection.
    Collections we use:
    - resumes: Resume builder form data
    - skill_gap_reports: AI coaching output per user
    """
    db = get_mongo_db()
    return db[name]


def test_mongo_connection() -> bool:
    """
    Test if MongoDB is reachable.
    Returns True if connection successful, False otherwise.
    """
    try:
        client = get_mongo_client()
        # ping command checks connection
        client.admin.command('ping')
        return True
    except Exception as e:
        logger.error("MongoDB connection failed: %s", e)
        return False


# Collection name constants (avoid typos)
COLLECTIONS = {
    "resumes": "resumes",
    "skill_gap_reports": "skill_gap_reports"
}


def init_mongo_indexes():
    """
    Create indexes for better query performance.
    Call this once during app startup.
    """
    db = get_mongo_db()

    # One resume per user
    db[COLLECTIONS["resumes"]].create_index("user_id", unique=True)

    # Reports are listed newest first per user
    db[COLLECTIONS["skill_gap_reports"]].create_index([
        ("user_id", ASCENDING),
        ("created_at", DESCENDING)
    ])

    logger.info("MongoDB indexes created successfully")
