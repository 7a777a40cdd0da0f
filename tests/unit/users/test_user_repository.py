"""Unit tests for InMemoryUserRepository."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import pytest

from modules.users.exceptions import UserAlreadyExists
from modules.users.models import User
from modules.users.repositories import InMemoryUserRepository

pytestmark = pytest.mark.unit


@pytest.fixture()
def repo():
    return InMemoryUserRepository()


def test_get_by_email(repo):
    user = repo.save(User.new(email="a@example.com", password_hash="x"))
    assert repo.get_by_email("a@example.com") == user
    assert repo.get_by_email("b@example.com") is None


def test_saving_same_user_again_is_allowed(repo):
    user = repo.save(User.new(email="a@example.com", password_hash="x"))
    repo.save(user.with_roles(["ADMIN"]))
    assert repo.get_by_email("a@example.com").roles == frozenset({"ADMIN"})


def test_duplicate_email_rejected(repo):
    repo.save(User.new(email="a@example.com", password_hash="x"))
    with pytest.raises(UserAlreadyExists):
        repo.save(User.new(email="a@example.com", password_hash="y"))
    assert repo.count() == 1


def test_delete_frees_email(repo):
    user = repo.save(User.new(email="a@example.com", password_hash="x"))
    assert repo.delete(user.id) is True
    assert repo.get_by_email("a@example.com") is None
    repo.save(User.new(email="a@example.com", password_hash="y"))


def test_concurrent_registration_keeps_one(repo):
    def register(_):
        try:
            repo.save(User.new(email="race@example.com", password_hash="x"))
            return True
        except UserAlreadyExists:
            return False

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(register, range(8)))

    assert results.count(True) == 1
    assert repo.count() == 1
