"""Shared fixtures for the docs MCP server tests."""

import pytest

from core.documents import DocumentStore
from core.weather import WeatherGateway
from tools.dispatcher import Dispatcher

GUIDE = "Setup instructions for API keys"
FAQ = "Billing questions"


@pytest.fixture
def docs_dir(tmp_path):
    (tmp_path / "guide.md").write_text(GUIDE, encoding="utf-8")
    (tmp_path / "faq.md").write_text(FAQ, encoding="utf-8")
    (tmp_path / "notes.txt").write_text("API notes that are not markdown", encoding="utf-8")
    (tmp_path / "drafts.md").mkdir()
    return tmp_path


@pytest.fixture
def store(docs_dir):
    return DocumentStore(docs_dir)


@pytest.fixture
def dispatcher(store):
    return Dispatcher(store=store, weather=WeatherGateway(api_key=None))
