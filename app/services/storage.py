"""
Report Storage

Insert-only MongoDB persistence for generated reports. Documents are
validated against ReportDocument first so that every stored report carries
its type and schema version.
"""
import threading
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from bson import ObjectId
from pydantic import ValidationError as SchemaError
from pymongo import MongoClient
from pymongo.errors import PyMongoError

from app.config import StorageConfig
from app.models.report import ReportDocument
from app.utils import ConfigurationError, StorageError, get_logger

logger = get_logger(__name__)


class ReportRepository:
    """Reports collection wrapper. The Mongo client is opened on first use."""

    def __init__(self, config: Optional[StorageConfig] = None, collection: Any = None):
        self.config = config or StorageConfig()
        self._client: Optional[MongoClient] = None
        self._collection = collection
        self._lock = threading.Lock()

    @property
    def is_configured(self) -> bool:
        return self._collection is not None or bool(self.config.uri)

    def _get_collection(self):
        if self._collection is not None:
            return self._collection
        if not self.config.uri:
            raise ConfigurationError("MONGODB_URI is not configured", component="storage")

        # threadpool workers race on the first request
        with self._lock:
            if self._collection is None:
                self._client = MongoClient(
                    self.config.uri,
                    serverSelectionTimeoutMS=self.config.server_selection_timeout_ms,
                )
                self._collection = self._client[self.config.database][self.config.collection]
                logger.info(f"Connected report store: {self.config.database}.{self.config.collection}")
        return self._collection

    def insert(self, report: Dict[str, Any]) -> str:
        """
        Validate and store a report.

        Args:
            report: Report object produced by the assistant

        Returns:
            Generated document id as a string
        """
        try:
            document = ReportDocument.model_validate(report).model_dump()
        except SchemaError as e:
            raise StorageError(
                "Report does not match the stored schema",
                operation="insert",
                details={"errors": e.errors(include_url=False, include_input=False)},
            ) from e

        now = datetime.now(timezone.utc)
        document["createdAt"] = now
        document["updatedAt"] = now

        try:
            result = self._get_collection().insert_one(document)
        except PyMongoError as e:
            raise StorageError(f"Failed to save report: {e}", operation="insert") from e

        report_id = str(result.inserted_id)
        logger.info(f"Stored report {report_id} ({document['report_type']})")
        return report_id

    def get(self, report_id: str) -> Optional[Dict[str, Any]]:
        """Load a stored report, or None for malformed and unknown ids."""
        if not ObjectId.is_valid(report_id):
            return None

        try:
            document = self._get_collection().find_one({"_id": ObjectId(report_id)})
        except PyMongoError as e:
            raise StorageError(f"Failed to load report: {e}", operation="get") from e

        if document is None:
            return None
        document["_id"] = str(document["_id"])
        return document

    def ping(self) -> bool:
        """True when the database answers."""
        if not self.is_configured:
            return False
        try:
            self._get_collection().database.command("ping")
            return True
        except PyMongoError as e:
            logger.warning(f"Report store ping failed: {e}")
            return False

    def close(self) -> None:
        with self._lock:
            if self._client is not None:
                self._client.close()
                self._client = None
                self._collection = None
