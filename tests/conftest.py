"""
Pytest configuration and shared fixtures.
"""

from unittest.mock import MagicMock

import pytest

from ragchat.adapters.outbound.embedding.azure_openai_embedding import EmbeddingConfig
from ragchat.adapters.outbound.search.azure_search_adapter import SearchConfig
from ragchat.core.domain import ProjectDocument


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (no external dependencies)")
    config.addinivalue_line("markers", "integration: Integration tests (mocked backends)")


@pytest.fixture
def make_response():
    """Factory for mock ``requests.Response`` objects."""

    def _make(status_code=200, json_body=None, text=None):
        response = MagicMock()
        response.status_code = status_code
        if isinstance(json_body, Exception):
            response.json.side_effect = json_body
        else:
            response.json.return_value = json_body
        response.text = text if text is not None else str(json_body)
        return response

    return _make


@pytest.fixture
def mock_session():
    """A mock ``requests.Session`` with a real headers dict."""
    session = MagicMock()
    session.headers = {}
    return session


@pytest.fixture
def embedding_config():
    return EmbeddingConfig(
        endpoint="https://test.openai.azure.com/",
        api_key="test-openai-key",
        deployment="text-embedding-ada-002",
    )


@pytest.fixture
def search_config():
    return SearchConfig(
        endpoint="https://test.search.windows.net",
        index_name="projects",
        api_key="test-search-key",
    )


@pytest.fixture
def sample_projects():
    """Three portfolio projects as loaded from projects.json."""
    return [
        ProjectDocument(
            id="p1",
            title="Inventory API",
            description="REST API for warehouse stock",
            tech_stack=["ASP.NET", "SQL Server"],
            date_range="2019-2020",
            raw_text="Built an inventory REST API with ASP.NET Core and SQL Server.",
        ),
        ProjectDocument(
            id="p2",
            title="Realtime Dashboard",
            description="Live metrics dashboard",
            tech_stack=["Node.js", "Socket.IO"],
            date_range="2021",
            raw_text="Realtime dashboard backend in Node.js with websockets.",
        ),
        ProjectDocument(
            id="p3",
            title="Photo Archive",
            description="Static site for family photos",
            tech_stack=["Hugo"],
            date_range="2022",
            raw_text="Static photo archive generated with Hugo.",
        ),
    ]


@pytest.fixture
def mock_embedding():
    """A mock 1536-dimensional embedding vector."""
    return [0.001 * i for i in range(1536)]
