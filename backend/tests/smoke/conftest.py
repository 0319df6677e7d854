"""Pytest configuration for smoke tests."""

import os

import httpx
import pytest


def pytest_addoption(parser):
    """Add command line options for smoke tests."""
    parser.addoption(
        "--api-url",
        action="store",
        default=os.getenv("API_ENDPOINT", "http://localhost:8000"),
        help="API endpoint URL for smoke tests (pulumi stack output api_endpoint)",
    )
    parser.addoption(
        "--frontend-url",
        action="store",
        default=os.getenv("FRONTEND_URL", ""),
        help="Frontend origin the API must allow (pulumi stack output frontend_url)",
    )


@pytest.fixture
def api_url(request):
    """Get the API URL from command line or environment."""
    return request.config.getoption("--api-url")


@pytest.fixture
def frontend_url(request):
    """Get the frontend origin, skipping CORS checks when unknown."""
    url = request.config.getoption("--frontend-url")
    if not url:
        pytest.skip("--frontend-url / FRONTEND_URL not provided")
    return url


@pytest.fixture
def client(api_url):
    """Create an HTTP client for the API."""
    with httpx.Client(base_url=api_url, timeout=30.0) as http_client:
        yield http_client
