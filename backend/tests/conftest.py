import pytest
from fastapi.testclient import TestClient

from quizgen.app import create_app
from quizgen.core.config import Settings
from quizgen.core.results import ResultStore
from tests.fakes import FakeCollection, FakeOpenAI


@pytest.fixture
def settings(monkeypatch):
    # Settings reads the process env; keep the host's values out of the defaults
    for name in ("PORT", "OPENAI_MODEL", "LOG_LEVEL", "QUIZ_RESULT_MISSING_NAME_STATUS"):
        monkeypatch.delenv(name, raising=False)
    return Settings(openai_api_key="sk-test")


@pytest.fixture
def make_client(settings):
    """Build a TestClient around fakes. Lifespan is not run, so no MongoDB is touched."""

    def _make(content="[]", error=None, collection=None, settings=settings, **client_kwargs):
        openai_client = FakeOpenAI(content=content, error=error)
        collection = collection if collection is not None else FakeCollection()
        app = create_app(
            settings,
            openai_client=openai_client,
            results_store=ResultStore(collection),
        )
        client = TestClient(app, **client_kwargs)
        client.openai = openai_client
        client.collection = collection
        return client

    return _make
