import httpx
import pytest

from linksaver import create_app
from linksaver.config import TestConfig
from linksaver.extensions import db


@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        db.drop_all()
        db.create_all()
    yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture(autouse=True)
def offline_enrichment(monkeypatch):
    def _unreachable(url, *_args, **_kwargs):
        raise httpx.ConnectError(f"network disabled in tests: {url}")

    monkeypatch.setattr("linksaver.services.enrichment.fetch_html", _unreachable)
    monkeypatch.setattr("linksaver.services.enrichment.fetch_summary", _unreachable)
