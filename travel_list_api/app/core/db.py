"""
MongoDB integration for travels.

This module provides ``TravelRepository``, the only component that
talks to the database, and ``get_repository``, a FastAPI dependency
returning the repository attached to the running application.  A
single ``MongoClient`` is created at startup and shared by every
request; the client manages its own thread‑safe connection pool.

Travels are stored as plain documents.  The ObjectId generated on
insert lives in ``_id`` and is exposed to callers as a 24 character
hex string under ``id``; every other field is stored verbatim.

Each collection call runs inside ``pymongo.timeout`` so that it is
bounded by a deadline.  Driver and BSON exceptions are translated to
the exceptions in ``core.errors``; nothing is retried.
"""

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

import pymongo
from bson import ObjectId
from bson.errors import BSONError, InvalidId
from fastapi import Request
from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from .errors import InvalidIdError, NotFoundError, StorageConnectionError, StorageError


logger = logging.getLogger(__name__)

Travel = Dict[str, Any]

HEALTHY_STATUS = "connection to database established"

# Keys that carry the identifier.  They are never written from caller data.
ID_FIELDS = frozenset({"id", "_id"})


def is_id_field(field: str) -> bool:
    """True if ``field``, or the top level of a dotted path, is an identifier key."""
    return field.split(".", 1)[0] in ID_FIELDS


def parse_id(travel_id: str) -> ObjectId:
    """Convert a caller supplied id into an ObjectId.

    Raises ``InvalidIdError`` for anything that is not a 24 character
    hex string.  No database call is made.
    """
    if not isinstance(travel_id, str):
        raise InvalidIdError(str(travel_id))
    try:
        return ObjectId(travel_id)
    except (InvalidId, TypeError) as exc:
        raise InvalidIdError(travel_id) from exc


def to_document(record: Travel) -> Dict[str, Any]:
    """Strip identifier keys from a caller supplied record."""
    return {key: value for key, value in record.items() if key not in ID_FIELDS}


def to_travel(document: Dict[str, Any]) -> Travel:
    """Convert a stored document into a travel with a string ``id``."""
    travel: Travel = {"id": str(document["_id"])}
    travel.update((key, value) for key, value in document.items() if key not in ID_FIELDS)
    return travel


class TravelRepository:
    """Data access for the travels collection.

    Construct it with :meth:`connect` in production.  Tests may pass
    any PyMongo compatible client and collection directly.

    Parameters
    ----------
    client : MongoClient
        Client owning the connection pool; closed by :meth:`close`.
    collection : Collection
        The travels collection.
    timeout : float
        Default per-call deadline in seconds.  Each operation accepts a
        ``timeout`` argument overriding it.
    """

    def __init__(self, client: MongoClient, collection: Collection, timeout: float = 5.0) -> None:
        self.client = client
        self.collection = collection
        self.timeout = timeout

    @classmethod
    def connect(
        cls,
        uri: str,
        database: str,
        collection: str,
        timeout: float = 20.0,
        operation_timeout: float = 5.0,
    ) -> "TravelRepository":
        """Connect to MongoDB, verify it answers a ping and select the collection.

        Raises ``StorageConnectionError`` if the URI is invalid or the
        server cannot be reached within ``timeout`` seconds.
        """
        try:
            client: MongoClient = MongoClient(uri, serverSelectionTimeoutMS=int(timeout * 1000))
        except (PyMongoError, ValueError) as exc:
            raise StorageConnectionError(f"Cannot create database client: {exc}") from exc
        logger.info("Database client created")

        try:
            with pymongo.timeout(timeout):
                client.admin.command("ping")
        except PyMongoError as exc:
            client.close()
            raise StorageConnectionError(f"Database did not answer ping: {exc}") from exc
        logger.info("Database client connected to %s.%s", database, collection)

        return cls(client, client[database][collection], timeout=operation_timeout)

    @contextmanager
    def _operation(self, action: str, timeout: Optional[float] = None) -> Iterator[None]:
        """Run a block under the call deadline and wrap driver errors."""
        with pymongo.timeout(self.timeout if timeout is None else timeout):
            try:
                yield
            except (PyMongoError, BSONError, OverflowError) as exc:
                logger.error("Failed to %s: %s", action, exc)
                raise StorageError(f"Failed to {action}: {exc}") from exc

    def health_check(self) -> str:
        """Ping the server and return a status string."""
        try:
            with pymongo.timeout(self.timeout):
                self.client.admin.command("ping")
        except PyMongoError as exc:
            raise StorageConnectionError("connection error") from exc
        return HEALTHY_STATUS

    def list_all(self, timeout: Optional[float] = None) -> List[Travel]:
        """Return every travel in natural storage order."""
        with self._operation("list travels", timeout):
            return [to_travel(document) for document in self.collection.find({})]

    def get_one(self, travel_id: str, timeout: Optional[float] = None) -> Travel:
        """Return a single travel or raise ``NotFoundError``."""
        object_id = parse_id(travel_id)
        with self._operation(f"fetch travel {travel_id}", timeout):
            document = self.collection.find_one({"_id": object_id})
        if document is None:
            raise NotFoundError(travel_id)
        return to_travel(document)

    def insert_one(self, record: Travel, timeout: Optional[float] = None) -> Travel:
        """Persist a new travel under a freshly generated id.

        Any ``id`` or ``_id`` in ``record`` is discarded.  Returns the
        stored travel including its new ``id``.
        """
        document = to_document(record)
        document["_id"] = ObjectId()
        with self._operation("insert travel", timeout):
            self.collection.insert_one(document)
        logger.info("Inserted travel %s", document["_id"])
        return to_travel(document)

    def replace_one(self, travel_id: str, record: Travel, timeout: Optional[float] = None) -> Travel:
        """Replace the whole content of a travel, keeping its id.

        Fields missing from ``record`` are removed from the stored
        document.  Raises ``StorageError`` if no travel has this id.
        """
        object_id = parse_id(travel_id)
        document = to_document(record)
        with self._operation(f"replace travel {travel_id}", timeout):
            result = self.collection.replace_one({"_id": object_id}, document)
        if result.matched_count != 1:
            raise StorageError(f"Failed to replace travel {travel_id}: no matching travel")
        document["_id"] = object_id
        return to_travel(document)

    def update_field(self, travel_id: str, field: str, value: Any, timeout: Optional[float] = None) -> None:
        """Set a single field on a travel."""
        object_id = parse_id(travel_id)
        if is_id_field(field):
            raise StorageError(f"Failed to update travel {travel_id}: '{field}' is immutable")
        with self._operation(f"update travel {travel_id}", timeout):
            result = self.collection.update_one({"_id": object_id}, {"$set": {field: value}})
        if result.matched_count != 1:
            raise StorageError(f"Failed to update travel {travel_id}: no matching travel")

    def delete_one(self, travel_id: str, timeout: Optional[float] = None) -> None:
        """Delete a travel.  Deleting an absent id is not an error."""
        object_id = parse_id(travel_id)
        with self._operation(f"delete travel {travel_id}", timeout):
            self.collection.delete_one({"_id": object_id})

    def close(self) -> None:
        """Close the client.  Failures are logged and swallowed."""
        try:
            self.client.close()
        except Exception:
            logger.exception("Failed to close database client")
        else:
            logger.info("Database client closed")


def get_repository(request: Request) -> TravelRepository:
    """FastAPI dependency returning the repository created at startup."""
    return request.app.state.repository
