"""
MongoDB connection management for the idea research archive.
"""
from typing import Optional
import logging
from pymongo import MongoClient
from pymongo.database import Database
from pymongo.collection import Collection
from ..config import Settings
from ..exceptions import DatabaseError

logger = logging.getLogger(__name__)

class DatabaseConnection:
    """Singleton class for managing MongoDB connections"""
    _instance: Optional['DatabaseConnection'] = None
    _client: Optional[MongoClient] = None
    _db: Optional[Database] = None

    def __new__(cls, settings: Optional[Settings] = None):
        if cls._instance is None:
            cls._instance = super(DatabaseConnection, cls).__new__(cls)
        return cls._instance

    def __init__(self, settings: Optional[Settings] = None):
        if not self._client:
            self._initialize_connection(settings or Settings.from_env())

    def _initialize_connection(self, settings: Settings):
        """Initialize MongoDB connection"""
        if not settings.mongodb_uri:
            raise DatabaseError("MONGODB_URI environment variable not set")
        try:
            self._client = MongoClient(settings.mongodb_uri)
            self._db = self._client[settings.mongodb_db_name]
            logger.info(f"Connected to MongoDB database: {settings.mongodb_db_name}")
        except Exception as e:
            logger.error(f"Failed to connect to MongoDB: {str(e)}")
            raise DatabaseError(f"MongoDB connection failed: {str(e)}")

    def get_collection(self, collection_name: str) -> Collection:
        """Get a specific collection"""
        return self._db[collection_name]


def get_collection(collection_name: str, settings: Optional[Settings] = None) -> Collection:
    """Get a specific collection"""
    return DatabaseConnection(settings).get_collection(collection_name)
