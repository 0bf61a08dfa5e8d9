"""Shared fixtures: the FastAPI app wired to an in-memory Supabase and a temp upload dir."""
from __future__ import annotations

import os
import tempfile

# Must be set before hoteltrek.config is imported
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="hoteltrek-uploads-"))
os.environ.setdefault("ENVIRONMENT", "test")

import pytest
from fastapi.testclient import TestClient

from hoteltrek.config import settings
from hoteltrek.core.rate_limit import limiter
from hoteltrek.database.supabase_client import get_supabase, get_service_supabase
from hoteltrek.main import app
from hoteltrek.modules.auth.service import clear_auth_cache
from hoteltrek.modules.uploads.storage import LocalStorage, get_storage
from tests.fake_supabase import FakeSupabase


@pytest.fixture()
def fake_supabase():
    return FakeSupabase()


@pytest.fixture()
def storage():
    # Same directory the /uploads static mount serves
    return LocalStorage(settings.upload_dir)


@pytest.fixture()
def client(fake_supabase, storage):
    app.dependency_overrides[get_supabase] = lambda: fake_supabase
    app.dependency_overrides[get_service_supabase] = lambda: fake_supabase
    app.dependency_overrides[get_storage] = lambda: storage
    clear_auth_cache()
    limiter.reset()
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def _login(fake_supabase, email, full_name=None, role=None):
    user = fake_supabase.auth.create_user(email, full_name=full_name, role=role)
    token = fake_supabase.auth.issue_token(user.id)
    return user, {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def guest(fake_supabase):
    """(user, headers) for a regular guest"""
    return _login(fake_supabase, "guest@hoteltrek.io", full_name="Grace Guest")


@pytest.fixture()
def other_guest(fake_supabase):
    return _login(fake_supabase, "other@hoteltrek.io", full_name="Oscar Other")


@pytest.fixture()
def admin(fake_supabase):
    return _login(fake_supabase, "admin@hoteltrek.io", full_name="Ada Admin", role="admin")


@pytest.fixture()
def hotel(fake_supabase):
    return fake_supabase.add_row("hotels", {
        "name": "Harbour View Hotel",
        "description": "Waterfront rooms",
        "address": "12 Quay Street",
        "city": "Lisbon",
        "country": "Portugal",
        "price_per_night": 120.0,
        "total_rooms": 3,
        "amenities": ["wifi"],
        "image_urls": [],
        "latitude": 38.7077,
        "longitude": -9.1365,
    })

