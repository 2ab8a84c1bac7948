"""Pytest configuration and shared fixtures for hotelbook tests."""

from datetime import datetime
from pathlib import Path
from typing import Callable

import pytest
from fastapi.testclient import TestClient

from hotelbook.services import identity
from hotelbook.store import RecordStore, get_store

# Fixed clock for engine tests: bookings dated 2025-06-01 onwards are in the future.
NOW = datetime(2025, 5, 1, 9, 30, 0)


@pytest.fixture
def store(tmp_path: Path) -> RecordStore:
    """A bootstrapped store (seed rooms, empty tables, default admin secret)."""
    s = RecordStore(tmp_path / "data")
    s.bootstrap()
    return s


@pytest.fixture
def customer(store: RecordStore) -> Callable[..., str]:
    """Factory registering a user, optionally with a complete profile."""

    def _make(username: str = "alice", phone: str = "5551234567", complete: bool = True) -> str:
        assert identity.register(store, username, phone)
        if complete:
            identity.profile_upsert(
                store, username,
                full_name=username.title() + " Example",
                id_number="ID-" + phone[-4:],
                email=f"{username}@example.com",
                address="1 Harbour Road",
                phone=phone,
            )
        return username

    return _make


@pytest.fixture
def client(store: RecordStore):
    """TestClient whose requests all use the temporary store."""
    from hotelbook.main import app

    app.dependency_overrides[get_store] = lambda: store
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
