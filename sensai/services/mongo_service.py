"""
MongoDB Service - CRUD operations for document collections.

Collections in this database:
1. resumes           - Resume builder form data (one document per user)
2. skill_gap_reports - AI coaching output (skill gap, resume review, coding tips)

WHY MongoDB for these?
- Resume sections are nested lists of free-form entries
- AI reports are markdown blobs with varying context fields
- No joins needed - documents are self-contained
"""

from datetime import datetime
from typing import Optional, List
from pymongo import DESCENDING, ReturnDocument
from pymongo.collection import Collection

from sensai.db.mongodb import get_collection, COLLECTIONS


# ============================================================
# HELPER: Convert ObjectId to string for JSON serialization
# ============================================================

def serialize_doc(doc: dict) -> dict:
    """Convert MongoDB document to JSON-serializable dict."""
    if doc is None:
        return None
    if "_id" in doc:
        doc["_id"] = str(doc["_id"])
    return doc


def serialize_docs(docs: list) -> list:
    """Convert list of MongoDB documents to JSON-serializable list."""
    return [serialize_doc(doc) for doc in docs]


# ============================================================
# RESUMES COLLECTION
# ============================================================

RESUME_SECTIONS = ("contact_info", "skills", "experience", "education", "projects", "achievements")


class ResumeDocumentService:
    """
    Handles resume form storage.
    Exactly one document per user, written with upsert.
    """

    def __init__(self):
        self.collection: Collection = get_collection(COLLECTIONS["resumes"])

    def upsert(self, user_id: int, resume: dict) -> dict:
        """
        Create or replace the user's resume sections.

        Args:
            user_id: PostgreSQL user ID (foreign reference)
            resume: Form data keyed by RESUME_SECTIONS

        Returns:
            The stored document
        """
        now = datetime.utcnow()
        sections = {key: resume.get(key) or ([] if key != "contact_info" else {}) for key in RESUME_SECTIONS}
        doc = self.collection.find_one_and_update(
            {"user_id": user_id},
            {
                "$set": {**sections, "updated_at": now},
                "$setOnInsert": {"user_id": user_id, "created_at": now}
            },
            upsert=True,
            return_document=ReturnDocument.AFTER
        )
        return serialize_doc(doc)

    def get_by_user(self, user_id: int) -> Optional[dict]:
        """Fetch the user's resume document."""
        doc = self.collection.find_one({"user_id": user_id})
        return serialize_doc(doc)


# ============================================================
# SKILL GAP REPORTS COLLECTION
# ============================================================

class SkillGapReportService:
    """
    Stores every AI coaching report so users can revisit them.
    """

    def __init__(self):
        self.collection: Collection = get_collection(COLLECTIONS["skill_gap_reports"])

    def insert(
        self,
        user_id: int,
        kind: str,
        content: str,
        target_role: str = None,
        target_company: str = None
    ) -> str:
        """
        Insert a report.

        Args:
            kind: skill_gap | resume_image | recommendation
            content: Markdown produced by the model

        Returns:
            MongoDB ObjectId as string
        """
        doc = {
            "user_id": user_id,
            "kind": kind,
            "target_role": target_role,
            "target_company": target_company,
            "content": content,
            "created_at": datetime.utcnow()
        }
        result = self.collection.insert_one(doc)
        return str(result.inserted_id)

    def list_by_user(self, user_id: int, limit: int = 20) -> List[dict]:
        """Fetch the user's reports, newest first."""
        cursor = (
            self.collection.find({"user_id": user_id})
            .sort([("created_at", DESCENDING), ("_id", DESCENDING)])
            .limit(limit)
        )
        return serialize_docs(list(cursor))
