"""Pytest configuration and fixtures for integration tests.

Loads .env and skips the live tests when GEMINI_API_KEY is not configured.
"""

import os
from pathlib import Path

import pytest
from dotenv import load_dotenv


def pytest_configure(config):
    """Load environment variables before test collection.

    Location lookups are disabled so restaurant searches do not depend on the
    network position of the machine running the tests.
    """
    env_path = Path(__file__).parent.parent.parent / ".env"
    load_dotenv(env_path)

    os.environ["ENABLE_IP_GEOLOCATION"] = "false"

    print("\n" + "=" * 70)
    print("Note: These tests require a valid GEMINI_API_KEY")
    print(f"Environment loaded from: {env_path}")
    print("  - IP geolocation: DISABLED")
    print("=" * 70 + "\n")


@pytest.fixture(scope="session", autouse=True)
def check_api_keys():
    """Skip the session if the backend credential is missing."""
    if not os.getenv("GEMINI_API_KEY"):
        pytest.skip(
            "Integration tests skipped. Missing API key: GEMINI_API_KEY. Please set it in your .env file.",
            allow_module_level=True,
        )


@pytest.fixture(scope="module")
def client():
    from food_search.services.gemini import create_client

    return create_client(os.environ["GEMINI_API_KEY"])
