# src/diary_mood/core/store.py
import logging
from datetime import datetime, timezone

from pymongo import DESCENDING, ReturnDocument
from pymongo.database import Database

from .config import ENTRIES_COLLECTION, USERS_COLLECTION
from .models import Entry

logger = logging.getLogger(__name__)

MAX_ENTRIES = 50


def _to_entry(doc: dict) -> Entry:
    data = {k: v for k, v in doc.items() if k != "_id"}
    # BSON datetimes are UTC; a client without tz_aware hands them back naive.
    created_at = data.get("created_at")
    if isinstance(created_at, datetime) and created_at.tzinfo is None:
        data["created_at"] = created_at.replace(tzinfo=timezone.utc)
    return Entry(id=str(doc["_id"]), **data)


class DiaryStore:
    """
    MongoDB persistence for users and diary entries.

    Entries are insert-only; there is no update or delete path.
    """

    def __init__(
        self,
        db: Database,
        users_collection: str = USERS_COLLECTION,
        entries_collection: str = ENTRIES_COLLECTION,
    ):
        self.users = db[users_collection]
        self.entries = db[entries_collection]

    def upsert_user(self, email: str, name: str | None, spotify_id: str | None) -> dict:
        doc = self.users.find_one_and_update(
            {"email": email},
            {"$set": {"name": name, "spotify_id": spotify_id}},
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )
        logger.info(f"Upserted user '{email}'")
        return doc

    def find_user_by_email(self, email: str) -> dict | None:
        return self.users.find_one({"email": email})

    def create_entry(self, user_id: str, data: dict) -> Entry:
        doc = {
            **data,
            "user_id": user_id,
            "created_at": datetime.now(timezone.utc),
        }
        result = self.entries.insert_one(doc)
        doc["_id"] = result.inserted_id
        logger.info(f"Created entry {result.inserted_id} for user {user_id}")
        return _to_entry(doc)

    def list_entries(self, user_id: str, limit: int = MAX_ENTRIES) -> list[Entry]:
        """Most recent entries for `user_id`, newest first, never more than `MAX_ENTRIES`."""
        limit = max(1, min(limit, MAX_ENTRIES))
        cursor = (
            self.entries.find({"user_id": user_id})
            .sort([("created_at", DESCENDING)])
            .limit(limit)
        )
        return [_to_entry(doc) for doc in cursor]
