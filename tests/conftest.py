# tests/conftest.py
import pytest
from fastapi.testclient import TestClient

from strady.adapters.config import AppConfig
from strady.api.http import create_app


@pytest.fixture
def settings(tmp_path):
    return AppConfig(DATA_DIR=tmp_path / "data")


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    return TestClient(app)
