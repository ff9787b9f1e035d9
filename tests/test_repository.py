"""Unit tests for TravelRepository."""

import logging
from unittest.mock import MagicMock

import bson
import mongomock
import pytest
from bson import ObjectId
from pymongo import _csot
from pymongo.errors import ExecutionTimeout, ServerSelectionTimeoutError

from travel_list_api.app.core import db
from travel_list_api.app.core.db import HEALTHY_STATUS, TravelRepository
from travel_list_api.app.core.errors import (
    InvalidIdError,
    NotFoundError,
    StorageConnectionError,
    StorageError,
)


def _broken_repository() -> TravelRepository:
    collection = MagicMock()
    return TravelRepository(MagicMock(), collection, timeout=1)


def test_insert_then_get_returns_same_content(repository):
    record = {"name": "Andes", "destination": "Lima", "dates": ["2025-09-01", "2025-09-14"]}
    created = repository.insert_one(record)

    fetched = repository.get_one(created["id"])

    assert fetched == {"id": created["id"], **record}


def test_insert_overwrites_client_id(repository, mongo_client):
    supplied = str(ObjectId())
    created = repository.insert_one({"id": supplied, "_id": "mine", "destination": "Quito"})

    assert created["id"] != supplied
    assert ObjectId.is_valid(created["id"])
    stored = mongo_client["travel_list"]["travels"].find_one({})
    assert stored["_id"] == ObjectId(created["id"])
    assert "id" not in stored


def test_inserts_never_share_an_id(repository):
    ids = {repository.insert_one({"destination": "Lima"})["id"] for _ in range(20)}
    assert len(ids) == 20


def test_list_all_empty_collection(repository):
    assert repository.list_all() == []


def test_list_all_returns_every_travel(repository):
    first = repository.insert_one({"destination": "Lima"})
    second = repository.insert_one({"destination": "Cusco"})

    travels = repository.list_all()

    assert sorted(t["id"] for t in travels) == sorted([first["id"], second["id"]])
    assert {t["destination"] for t in travels} == {"Lima", "Cusco"}


@pytest.mark.parametrize("bad_id", ["", "123", "zzzzzzzzzzzzzzzzzzzzzzzz", "5f1d7f3e9b1e8a3b4c5d6e7f0"])
def test_get_one_invalid_id_does_not_touch_storage(bad_id):
    repo = _broken_repository()

    with pytest.raises(InvalidIdError):
        repo.get_one(bad_id)

    repo.collection.find_one.assert_not_called()


def test_get_one_missing_travel(repository):
    with pytest.raises(NotFoundError):
        repository.get_one(str(ObjectId()))


def test_replace_one_keeps_id(repository):
    created = repository.insert_one({"name": "Old", "destination": "Lima", "budget": 900})

    replaced = repository.replace_one(created["id"], {"id": "ignored", "destination": "Arequipa"})

    assert replaced == {"id": created["id"], "destination": "Arequipa"}
    assert repository.get_one(created["id"]) == {"id": created["id"], "destination": "Arequipa"}


def test_replace_one_missing_travel(repository):
    with pytest.raises(StorageError):
        repository.replace_one(str(ObjectId()), {"destination": "Lima"})


def test_replace_one_invalid_id(repository):
    with pytest.raises(InvalidIdError):
        repository.replace_one("nope", {"destination": "Lima"})


def test_update_field_sets_single_field(repository):
    created = repository.insert_one({"name": "Andes", "destination": "Lima"})

    repository.update_field(created["id"], "destination", "Cusco")

    assert repository.get_one(created["id"]) == {"id": created["id"], "name": "Andes", "destination": "Cusco"}


def test_update_field_rejects_identifier(repository):
    created = repository.insert_one({"destination": "Lima"})

    for field in ("id", "_id", "id.x", "_id.extra"):
        with pytest.raises(StorageError):
            repository.update_field(created["id"], field, str(ObjectId()))

    assert repository.get_one(created["id"])["id"] == created["id"]


def test_update_field_missing_travel(repository):
    with pytest.raises(StorageError):
        repository.update_field(str(ObjectId()), "destination", "Cusco")


def test_update_field_invalid_id(repository):
    with pytest.raises(InvalidIdError):
        repository.update_field("nope", "destination", "Cusco")


def test_delete_one_missing_travel_is_not_an_error(repository):
    repository.delete_one(str(ObjectId()))


def test_delete_one_invalid_id(repository):
    with pytest.raises(InvalidIdError):
        repository.delete_one("not-an-id")


def test_lifecycle_scenario(repository):
    travel_id = repository.insert_one({"destination": "Lima"})["id"]
    assert repository.get_one(travel_id) == {"id": travel_id, "destination": "Lima"}

    repository.update_field(travel_id, "destination", "Cusco")
    assert repository.get_one(travel_id) == {"id": travel_id, "destination": "Cusco"}

    repository.delete_one(travel_id)
    with pytest.raises(NotFoundError):
        repository.get_one(travel_id)


def test_transport_faults_become_storage_errors():
    repo = _broken_repository()
    repo.collection.find.side_effect = ServerSelectionTimeoutError("no servers")
    repo.collection.find_one.side_effect = ExecutionTimeout("deadline exceeded")
    repo.collection.insert_one.side_effect = ServerSelectionTimeoutError("no servers")
    repo.collection.delete_one.side_effect = ServerSelectionTimeoutError("no servers")

    with pytest.raises(StorageError):
        repo.list_all()
    with pytest.raises(StorageError):
        repo.get_one(str(ObjectId()))
    with pytest.raises(StorageError):
        repo.insert_one({"destination": "Lima"})
    with pytest.raises(StorageError):
        repo.delete_one(str(ObjectId()))


def test_health_check(repository):
    assert repository.health_check() == HEALTHY_STATUS


def test_health_check_failure():
    repo = _broken_repository()
    repo.client.admin.command.side_effect = ServerSelectionTimeoutError("no servers")

    with pytest.raises(StorageConnectionError):
        repo.health_check()


def test_connect_selects_database_and_collection(monkeypatch):
    monkeypatch.setattr(db, "MongoClient", mongomock.MongoClient)

    repo = TravelRepository.connect("mongodb://db.example:27017", "trips", "journeys", timeout=2, operation_timeout=3)

    assert repo.collection.database.name == "trips"
    assert repo.collection.name == "journeys"
    assert repo.timeout == 3


def test_connect_fails_when_ping_fails(monkeypatch):
    fake_client = MagicMock()
    fake_client.admin.command.side_effect = ServerSelectionTimeoutError("no servers")
    monkeypatch.setattr(db, "MongoClient", MagicMock(return_value=fake_client))

    with pytest.raises(StorageConnectionError):
        TravelRepository.connect("mongodb://unreachable:27017", "trips", "journeys", timeout=0.1)

    fake_client.close.assert_called_once()


def test_close_failure_is_logged_not_raised(caplog):
    repo = _broken_repository()
    repo.client.close.side_effect = RuntimeError("socket already gone")

    with caplog.at_level(logging.ERROR, logger="travel_list_api.app.core.db"):
        repo.close()

    assert "Failed to close database client" in caplog.text


def test_unencodable_values_become_storage_errors():
    repo = _broken_repository()
    repo.collection.insert_one.side_effect = lambda document: bson.encode(document)
    repo.collection.replace_one.side_effect = lambda query, document: bson.encode(document)
    repo.collection.update_one.side_effect = lambda query, update: bson.encode(update)
    travel_id = str(ObjectId())

    with pytest.raises(StorageError):
        repo.insert_one({"budget": 2**70})
    with pytest.raises(StorageError):
        repo.replace_one(travel_id, {"budget": 2**70})
    with pytest.raises(StorageError):
        repo.update_field(travel_id, "budget", 2**70)


def test_operations_run_under_deadline():
    repo = _broken_repository()
    repo.timeout = 2.5
    deadlines = []

    def record_deadline(query):
        deadlines.append(_csot.get_timeout())
        return {"_id": query["_id"], "destination": "Lima"}

    repo.collection.find_one.side_effect = record_deadline
    travel_id = str(ObjectId())

    repo.get_one(travel_id)
    repo.get_one(travel_id, timeout=0.75)

    assert deadlines == [2.5, 0.75]
    assert _csot.get_timeout() is None


def test_connect_invalid_uri():
    with pytest.raises(StorageConnectionError):
        TravelRepository.connect("mongodb://localhost:notaport", "trips", "journeys", timeout=0.2)
