"""
Mood record storage.

A store holds one MoodRecord per user. Writes are conditional: create() only
succeeds when no record exists yet, and replace() only succeeds when the
stored version still matches the one the caller read. Callers that lose a
race get False back and can re-read and retry.
"""

import threading
from abc import ABC, abstractmethod
from typing import Dict, Optional

import structlog
from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError, PyMongoError

from moodtrack.errors import UpstreamError
from moodtrack.models.mood import MoodRecord

logger = structlog.get_logger()


class MoodRecordStore(ABC):
    @abstractmethod
    def find_by_user(self, user_id: str) -> Optional[MoodRecord]:
        """Return the user's record, or None if they never submitted a mood."""

    @abstractmethod
    def create(self, record: MoodRecord) -> bool:
        """Insert a first record. False if one already exists for the user."""

    @abstractmethod
    def replace(self, record: MoodRecord, expected_version: int) -> bool:
        """
        Overwrite the user's record if its version is still expected_version.

        The stored copy gets version expected_version + 1.

        Returns:
            True on success, False if the record changed in between
        """


class MongoMoodStore(MoodRecordStore):
    def __init__(self, collection: Collection):
        self.collection = collection

    def find_by_user(self, user_id: str) -> Optional[MoodRecord]:
        try:
            doc = self.collection.find_one({"userId": user_id}, {"_id": 0})
        except PyMongoError as e:
            raise UpstreamError(f"Failed to fetch mood record: {e}") from e
        if doc is None:
            return None
        return MoodRecord.from_document(doc)

    def create(self, record: MoodRecord) -> bool:
        doc = record.to_document()
        doc["version"] = 0
        try:
            self.collection.insert_one(doc)
        except DuplicateKeyError:
            logger.info("mood_record_exists", user_id=record.user_id)
            return False
        except PyMongoError as e:
            raise UpstreamError(f"Failed to create mood record: {e}") from e
        return True

    def replace(self, record: MoodRecord, expected_version: int) -> bool:
        doc = record.to_document()
        doc["version"] = expected_version + 1
        query = {"userId": record.user_id, "version": expected_version}
        if expected_version == 0:
            # Documents that predate versioning count as version 0
            query = {
                "userId": record.user_id,
                "$or": [{"version": 0}, {"version": {"$exists": False}}],
            }
        try:
            result = self.collection.replace_one(query, doc)
        except PyMongoError as e:
            raise UpstreamError(f"Failed to update mood record: {e}") from e
        return result.matched_count == 1


class InMemoryMoodStore(MoodRecordStore):
    """
    Process-local store with the same conditional-write contract.

    Used by tests and for running the API without a MongoDB deployment.
    """

    def __init__(self) -> None:
        self._records: Dict[str, MoodRecord] = {}
        self._lock = threading.Lock()

    def find_by_user(self, user_id: str) -> Optional[MoodRecord]:
        with self._lock:
            record = self._records.get(user_id)
            return record.model_copy(deep=True) if record else None

    def create(self, record: MoodRecord) -> bool:
        with self._lock:
            if record.user_id in self._records:
                return False
            self._records[record.user_id] = record.model_copy(update={"version": 0}, deep=True)
            return True

    def replace(self, record: MoodRecord, expected_version: int) -> bool:
        with self._lock:
            stored = self._records.get(record.user_id)
            if stored is None or stored.version != expected_version:
                return False
            self._records[record.user_id] = record.model_copy(
                update={"version": expected_version + 1}, deep=True
            )
            return True
