from __future__ import annotations

from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError

from user_management_backend.database import DatabaseService, UserRepository, UserSchema


def _seed(database: DatabaseService) -> None:
    with database.session() as session:
        repository = UserRepository(session)
        repository.add(UserSchema(name="Alice", age=30, email="alice@corp.io", address="Berlin"))
        repository.add(UserSchema(name="Bob", age=41, email="bob@home.net", address=None))
        repository.add(UserSchema(name="Carol_1", age=22, email="carol@else.org", address="Rome"))


def test_add_generates_identifier_and_timestamps(database: DatabaseService) -> None:
    with database.session() as session:
        user = UserRepository(session).add(
            UserSchema(name="Dana", age=19, email="dana@x.io")
        )

    assert user.id is not None
    assert user.created_at is not None
    assert user.updated_at is not None


def test_find_and_count_share_the_search_filter(database: DatabaseService) -> None:
    _seed(database)

    with database.session() as session:
        repository = UserRepository(session)
        assert repository.count() == 3
        assert repository.count(search="BERLIN") == 1
        assert [user.name for user in repository.find(search="o", limit=10)] == [
            "Alice",
            "Bob",
            "Carol_1",
        ]
        assert repository.count(search="_") == 1
        assert repository.find(search="nobody", limit=10) == []


def test_find_applies_offset_and_limit(database: DatabaseService) -> None:
    _seed(database)

    with database.session() as session:
        repository = UserRepository(session)
        page = repository.find(offset=1, limit=1)
        assert [user.name for user in page] == ["Bob"]
        assert repository.find(offset=5, limit=5) == []


def test_email_uniqueness_is_enforced(database: DatabaseService) -> None:
    _seed(database)

    with pytest.raises(IntegrityError), database.session() as session:
        UserRepository(session).add(UserSchema(name="Eve", age=1, email="bob@home.net"))

    with database.session() as session:
        assert UserRepository(session).count() == 3


def test_update_and_delete(database: DatabaseService) -> None:
    _seed(database)

    with database.session() as session:
        repository = UserRepository(session)
        bob = repository.get_by_email("bob@home.net")
        assert bob is not None
        repository.update(bob, {"age": 42, "address": "Lyon"})

    with database.session() as session:
        repository = UserRepository(session)
        bob = repository.get_by_email("bob@home.net")
        assert bob is not None
        assert (bob.age, bob.address) == (42, "Lyon")
        repository.delete(bob)

    with database.session() as session:
        repository = UserRepository(session)
        assert repository.get_by_email("bob@home.net") is None
        assert repository.get_by_id(uuid4()) is None
        assert repository.count() == 2
