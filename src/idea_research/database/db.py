"""
Append-only storage of research results in MongoDB.
"""
from typing import Dict, List, Optional
import logging
from pymongo import DESCENDING
from pymongo.collection import Collection
from ..config import Settings
from ..exceptions import DatabaseError
from .db_connection import get_collection
from .models import ResearchRecord

logger = logging.getLogger(__name__)

class ResearchDatabase:
    """MongoDB collection of research records; inserts only, no updates or deletes"""

    def __init__(self, collection: Optional[Collection] = None, settings: Optional[Settings] = None):
        """
        Args:
            collection: Collection to use; resolved from settings when omitted
            settings: Settings naming the database and collection
        """
        if collection is None:
            settings = settings or Settings.from_env()
            collection = get_collection(settings.mongodb_collection, settings)
        self.research = collection
        self.ensure_indexes()
        logger.info("Research database initialized")

    def ensure_indexes(self):
        """Index records by creation time for history listings"""
        try:
            self.research.create_index([("createdAt", DESCENDING)])
        except Exception as e:
            logger.error(f"Index creation failed: {e}")
            raise DatabaseError(f"Index creation failed: {str(e)}")

    def save_research(self, idea: str, keywords: str, summary: str) -> str:
        """
        Insert a research record stamped with its creation time

        Args:
            idea: The submitted idea text
            keywords: Comma-joined keywords
            summary: Markdown report

        Returns:
            str: Inserted record ID

        Raises:
            ValueError: If idea is empty
            DatabaseError: If the insert fails
        """
        if not isinstance(idea, str) or not idea.strip():
            raise ValueError("idea must be a non-empty string")

        record = ResearchRecord(idea=idea, keywords=keywords or "", summary=summary or "")
        try:
            record_id = str(self.research.insert_one(record.to_document()).inserted_id)
        except Exception as e:
            logger.error(f"Error saving research record: {e}")
            raise DatabaseError(f"Failed to save research: {str(e)}")

        logger.info(f"Saved research record: {record_id}")
        return record_id

    def list_recent(self, limit: int = 10) -> List[Dict]:
        """
        Most recent records first

        Args:
            limit: Maximum number of records

        Returns:
            List of record documents with string IDs
        """
        try:
            cursor = self.research.find({}).sort("createdAt", DESCENDING).limit(limit)
            records = []
            for doc in cursor:
                doc['_id'] = str(doc.get('_id'))
                records.append(doc)
            return records
        except Exception as e:
            logger.error(f"Error listing research records: {e}")
            raise DatabaseError(f"Failed to list research: {str(e)}")


class ResearchArchive:
    """Best-effort persistence kept apart from the request path"""

    def __init__(self, database: Optional[ResearchDatabase] = None, settings: Optional[Settings] = None):
        self._database = database
        self._settings = settings

    @property
    def database(self) -> ResearchDatabase:
        if self._database is None:
            self._database = ResearchDatabase(settings=self._settings)
        return self._database

    def save_best_effort(self, idea: str, keywords: str, summary: str) -> Optional[str]:
        """
        Save a research result, logging instead of raising on failure.

        Returns:
            Inserted record ID, or None when the store was unavailable
        """
        try:
            return self.database.save_research(idea, keywords, summary)
        except Exception as e:
            logger.error(f"Research archive error: {e}")
            return None
