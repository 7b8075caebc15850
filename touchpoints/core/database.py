"""
MongoDB Database Manager
Owns the storage client for the lifetime of the process. The application
opens it on startup, closes it on shutdown and hands it to request handlers
through dependency injection; nothing reaches for it as a module global.
"""
import logging
from datetime import datetime
from typing import Callable, Optional

from pymongo import MongoClient
from pymongo.database import Database

from touchpoints.core.config import MongoConfig
from touchpoints.core.errors import StorageError
from touchpoints.repositories.events import EventStore, utcnow

logger = logging.getLogger(__name__)


class DatabaseManager:
    """Explicit connection lifecycle around a single MongoClient"""

    def __init__(
        self,
        config: Optional[MongoConfig] = None,
        client_factory: Optional[Callable[..., MongoClient]] = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.config = config or MongoConfig()
        self._client_factory = client_factory or MongoClient
        self._clock = clock
        self._client: Optional[MongoClient] = None
        self._db: Optional[Database] = None
        self._store: Optional[EventStore] = None

    @property
    def is_open(self) -> bool:
        return self._client is not None

    def open(self) -> None:
        """Create the client, select the database and bootstrap indexes"""
        if self._client is not None:
            return
        self._client = self._client_factory(**self.config.get_connection_settings())
        self._db = self._client[self.config.DB]
        self._store = EventStore(self._db, self.config.COLLECTIONS, self._clock)
        try:
            self._store.ensure_indexes()
        except StorageError:
            # The client connects lazily; website writes retry before accumulating
            logger.warning("Indexes not created at startup, will retry on first website write")
        logger.info(f"Connected to MongoDB database {self.config.DB}")

    @property
    def db(self) -> Database:
        if self._db is None:
            raise RuntimeError("DatabaseManager is not open")
        return self._db

    @property
    def store(self) -> EventStore:
        if self._store is None:
            raise RuntimeError("DatabaseManager is not open")
        return self._store

    def close(self) -> None:
        """Close database connection"""
        if self._client is not None:
            self._client.close()
            logger.info("MongoDB connection closed")
        self._client = None
        self._db = None
        self._store = None
