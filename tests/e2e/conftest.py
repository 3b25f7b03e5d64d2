"""
Pytest configuration for E2E tests against a deployed Library API.
"""

import os
import uuid

import pytest
import requests


@pytest.fixture(scope="session")
def api_url():
    """API URL for the backend (the ApiUrl output of LibraryApiStack)."""
    url = os.getenv("API_URL")
    if not url:
        pytest.skip("API URL not provided. Set the API_URL environment variable.")
    return url.rstrip("/")


@pytest.fixture(scope="session")
def http():
    """Shared HTTP session for API calls."""
    with requests.Session() as session:
        session.headers.update({"Content-Type": "application/json"})
        yield session


@pytest.fixture
def test_user_id():
    """A throwaway user id so tests never see each other's reading lists."""
    return f"e2e-{uuid.uuid4()}"


@pytest.fixture
def reading_list(api_url, http, test_user_id):
    """Create a reading list for the test and delete it afterwards."""
    resp = http.post(
        f"{api_url}/reading-lists",
        json={"name": "E2E list", "userId": test_user_id, "bookIds": ["1"]},
        timeout=10,
    )
    resp.raise_for_status()
    created = resp.json()

    yield created

    http.delete(
        f"{api_url}/reading-lists/{created['id']}",
        params={"userId": test_user_id},
        timeout=10,
    )
