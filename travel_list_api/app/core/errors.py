"""
Exceptions raised by the storage layer.

Every PyMongo or BSON failure is wrapped in one of these classes at
the repository boundary so request handlers never depend on driver
exception types.  Handlers map them to HTTP status codes:

* ``StorageConnectionError`` -> 503 (fatal when raised at startup)
* ``InvalidIdError`` -> 400
* ``NotFoundError`` -> 404
* ``StorageError`` -> 500
"""


class RepositoryError(Exception):
    """Base exception for all storage layer errors."""


class StorageConnectionError(RepositoryError):
    """The database could not be reached or did not answer a ping."""


class InvalidIdError(RepositoryError):
    """A caller supplied identifier is not a valid ObjectId."""

    def __init__(self, travel_id: str):
        self.travel_id = travel_id
        super().__init__(f"'{travel_id}' is not a valid travel id")


class NotFoundError(RepositoryError):
    """No travel matches a well-formed identifier."""

    def __init__(self, travel_id: str):
        self.travel_id = travel_id
        super().__init__(f"Travel {travel_id} not found")


class StorageError(RepositoryError):
    """Any other transport, write or decode fault."""
