import logging
from typing import Optional

from fastapi import Request
from pymongo import MongoClient
from pymongo.database import Database
from pymongo.errors import PyMongoError

from .config import Config
from .errors import NotInitializedError, PersistenceError

logger = logging.getLogger(__name__)


class DatabaseManager:
    """Owns the MongoDB client and database handle for one process"""

    def __init__(self, uri: Optional[str] = None, db_name: Optional[str] = None):
        self.uri = uri
        self.db_name = db_name
        self.client: Optional[MongoClient] = None
        self.db: Optional[Database] = None

    def connect(self, uri: Optional[str] = None, db_name: Optional[str] = None) -> Database:
        """Connect once and cache the handle; later calls return the cached handle."""
        if self.db is not None:
            logger.info("Already connected to the database")
            return self.db

        uri = uri or self.uri or Config.MONGODB_URI
        db_name = db_name or self.db_name or Config.DATABASE_NAME
        if not uri:
            raise PersistenceError("Error connecting to database", "MONGODB_URI is not set")

        client = None
        try:
            client = MongoClient(uri, serverSelectionTimeoutMS=Config.SERVER_SELECTION_TIMEOUT_MS)
            client.admin.command("ping")
        except (PyMongoError, ValueError) as e:
            # a malformed URI fails in the constructor, before any client exists
            if client is not None:
                client.close()
            logger.error(f"MongoDB connection failed: {e}")
            raise PersistenceError("Error connecting to database", str(e)) from e

        self.client = client
        self.db = client[db_name]
        logger.info(f"MongoDB connected. DB={db_name}")
        return self.db

    def get_db(self) -> Database:
        if self.db is None:
            raise NotInitializedError()
        return self.db

    def close(self):
        if self.client is not None:
            self.client.close()
            logger.info("Database connection closed")
        self.client = None
        self.db = None

    @property
    def is_connected(self) -> bool:
        return self.db is not None


def get_db(request: Request) -> Database:
    return request.app.state.db_manager.get_db()
