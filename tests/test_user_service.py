"""Tests for user service."""

import asyncio

import httpx

from macro_tracker.domain.models import DEFAULT_MACRO_TARGET, MacroTarget
from macro_tracker.services.users import UserService
from tests.conftest import FakeWhopClient, InMemoryUserRepository


def test_ensure_user_creates_user_with_profile_and_default_target() -> None:
    repository = InMemoryUserRepository()
    service = UserService(repository, FakeWhopClient())

    user, target = asyncio.run(service.ensure_user("user_alice"))

    assert user.id == "user_alice"
    assert user.email == "alice@example.com"
    assert user.display_name == "Alice"
    assert target == DEFAULT_MACRO_TARGET
    assert repository.targets["user_alice"] == DEFAULT_MACRO_TARGET


def test_ensure_user_survives_profile_failure() -> None:
    repository = InMemoryUserRepository()
    whop_client = FakeWhopClient(profile_error=httpx.ConnectError("offline"))
    service = UserService(repository, whop_client)

    user, _target = asyncio.run(service.ensure_user("user_alice"))

    assert user.email is None
    assert user.display_name is None
    assert "user_alice" in repository.users


def test_ensure_user_reuses_existing_records() -> None:
    repository = InMemoryUserRepository()
    repository.create_user("user_alice", "old@example.com", "Old")
    custom = MacroTarget(calories=1800, protein=150, carbs=150, fats=50)
    repository.create_macro_target("user_alice", custom)
    service = UserService(repository, FakeWhopClient())

    user, target = asyncio.run(service.ensure_user("user_alice"))

    assert user.email == "old@example.com"
    assert target == custom


def test_ensure_user_backfills_missing_target() -> None:
    repository = InMemoryUserRepository()
    repository.create_user("user_alice", None, None)
    service = UserService(repository, FakeWhopClient())

    _user, target = asyncio.run(service.ensure_user("user_alice"))

    assert target == DEFAULT_MACRO_TARGET


def test_update_macro_target_creates_or_replaces() -> None:
    repository = InMemoryUserRepository()
    service = UserService(repository, FakeWhopClient())
    first = MacroTarget(calories=2000, protein=150, carbs=200, fats=60)
    second = MacroTarget(calories=2200, protein=160, carbs=220, fats=65)

    service.update_macro_target("user_alice", first)
    service.update_macro_target("user_alice", second)

    assert repository.targets["user_alice"] == second
