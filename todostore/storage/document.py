"""
MongoDB storage engine.

Unlike the relational engine, this engine holds one long-lived client for its
whole life; pymongo pools and reuses sockets underneath it. Identifiers are
the ObjectIds MongoDB generates, exposed as 24-character hex strings.
"""
import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

from bson import ObjectId
from pymongo import MongoClient
from pymongo import errors as mongo_errors

from todostore.exceptions import (
    ConfigurationError,
    DatabaseError,
    NotFoundError,
    StorageConnectionError,
    StorageError,
    ValidationError,
)
from todostore.models import Todo
from todostore.storage.interface import StorageEngine

logger = logging.getLogger(__name__)


class DocumentEngine(StorageEngine):
    """Todo storage on a MongoDB collection.

    Attributes:
        client: The pymongo client shared by every operation
        collection: The resolved todo collection
    """

    kind = "mongodb"

    def __init__(
        self,
        connection_string: str,
        database: str,
        collection: str,
        client: Optional[MongoClient] = None,
    ):
        """
        Connect and resolve the todo collection, creating it if absent.

        Args:
            connection_string: MongoDB connection string
            database: Database name
            collection: Collection name
            client: Optional pre-built client; the engine only closes clients it created

        Raises:
            ConfigurationError: If the connection string is unusable
            StorageConnectionError: If the server cannot be reached
        """
        self.database_name = database
        self.collection_name = collection
        self._owns_client = client is None
        self.client = client
        try:
            if self.client is None:
                self.client = MongoClient(connection_string)
            db = self.client.get_database(database)
            if collection not in db.list_collection_names():
                try:
                    db.create_collection(collection)
                except mongo_errors.CollectionInvalid:
                    # another process created it between the check and the create
                    logger.debug(f"Collection {database}/{collection} already exists")
            self.collection = db.get_collection(collection)
        except mongo_errors.ConfigurationError as e:
            self._release_client()
            raise ConfigurationError(
                f"Invalid MongoDB configuration: {e}",
                context={"database": database, "collection": collection},
                original_error=e,
            ) from e
        except mongo_errors.PyMongoError as e:
            logger.error(f"MongoDB initialization failed for {database}/{collection}", exc_info=True)
            self._release_client()
            raise self._translate(e, "initialize") from e

        logger.info(f"Connected to MongoDB: {database}/{collection}")

    def _release_client(self) -> None:
        if self._owns_client and self.client is not None:
            self.client.close()

    def _translate(self, exc: Exception, operation: str) -> StorageError:
        if isinstance(exc, mongo_errors.ConnectionFailure):
            return StorageConnectionError(
                f"Could not reach MongoDB during {operation}: {exc}",
                backend=self.kind,
                original_error=exc,
            )
        return DatabaseError(
            f"MongoDB {operation} on {self.database_name}/{self.collection_name} failed: {exc}",
            operation=operation,
            backend=self.kind,
            original_error=exc,
        )

    @contextmanager
    def _operation(self, name: str) -> Iterator[None]:
        """Translate driver errors raised inside the block into storage errors."""
        try:
            yield
        except mongo_errors.PyMongoError as e:
            raise self._translate(e, name) from e

    def _parse_id(self, todo_id: Optional[str]) -> ObjectId:
        if not isinstance(todo_id, str) or not ObjectId.is_valid(todo_id):
            raise ValidationError(
                f"Invalid todo ID '{todo_id}': MongoDB IDs are 24-character hex strings",
                field="id",
                value=todo_id,
                backend=self.kind,
            )
        return ObjectId(todo_id)

    @staticmethod
    def _fields(todo: Todo) -> Dict[str, Any]:
        return {
            "title": todo.title,
            "description": todo.description,
            "completed": todo.completed,
        }

    @staticmethod
    def _doc_to_todo(doc: Dict[str, Any]) -> Todo:
        return Todo(
            id=str(doc["_id"]),
            title=doc.get("title") or "",
            description=doc.get("description") or "",
            completed=bool(doc.get("completed", False)),
        )

    def create(self, todo: Todo) -> Todo:
        if todo.is_persisted:
            raise ValidationError(
                f"Todo already has ID '{todo.id}'; create expects an unsaved todo",
                field="id",
                value=todo.id,
                backend=self.kind,
            )
        with self._operation("insert"):
            result = self.collection.insert_one(self._fields(todo))
        new_id = str(result.inserted_id)
        logger.debug(f"Mongo: saved {new_id}")
        return todo.with_id(new_id)

    def retrieve_by_id(self, todo_id: str) -> Optional[Todo]:
        oid = self._parse_id(todo_id)
        with self._operation("find"):
            doc = self.collection.find_one({"_id": oid})
        return self._doc_to_todo(doc) if doc else None

    def retrieve_all(self) -> List[Todo]:
        with self._operation("find"):
            return [self._doc_to_todo(doc) for doc in self.collection.find()]

    def update(self, todo: Todo) -> None:
        if not todo.is_persisted:
            raise ValidationError(
                "Cannot update a todo without an ID",
                field="id",
                backend=self.kind,
            )
        oid = self._parse_id(todo.id)
        with self._operation("update"):
            result = self.collection.update_one({"_id": oid}, {"$set": self._fields(todo)})
        # update_one treats "no match" as success; surface it like the SQL engines do
        if result.matched_count == 0:
            raise NotFoundError(todo.id, backend=self.kind)
        logger.debug(f"Mongo: updated {todo.id}")

    def delete(self, todo_id: str) -> None:
        oid = self._parse_id(todo_id)
        with self._operation("delete"):
            self.collection.delete_one({"_id": oid})
        logger.debug(f"Mongo: deleted {todo_id}")

    def close(self) -> None:
        self._release_client()
