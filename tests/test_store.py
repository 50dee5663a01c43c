from __future__ import annotations

from datetime import datetime, timezone

import pytest

from userservice.models import User
from userservice.store import UserStore


def _user(user_id: str, email: str, name: str = "Tester") -> User:
    return User(
        id=user_id,
        name=name,
        email=email,
        created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )


@pytest.fixture()
def store() -> UserStore:
    return UserStore()


def test_empty_store(store: UserStore) -> None:
    assert len(store) == 0
    assert store.get_all() == []
    assert store.get_by_id("missing") is None
    assert store.find_by_email("nobody@example.com") is None


def test_insert_and_lookup(store: UserStore) -> None:
    user = _user("id-1", "ada@example.com", name="Ada")
    store.insert(user)

    assert len(store) == 1
    assert store.get_by_id("id-1") is user
    assert store.find_by_email("ada@example.com") is user


def test_find_by_email_is_case_sensitive_on_stored_value(store: UserStore) -> None:
    store.insert(_user("id-1", "ada@example.com"))

    assert store.find_by_email("Ada@Example.com") is None


def test_get_all_preserves_insertion_order(store: UserStore) -> None:
    first = _user("b", "first@example.com")
    second = _user("a", "second@example.com")
    store.insert(first)
    store.insert(second)

    assert store.get_all() == [first, second]


def test_get_all_returns_a_copy(store: UserStore) -> None:
    store.insert(_user("id-1", "ada@example.com"))

    snapshot = store.get_all()
    snapshot.clear()

    assert len(store) == 1
