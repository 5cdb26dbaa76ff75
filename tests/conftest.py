"""Shared fixtures: a throwaway SQLite database per test and an API client on top of it."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from fastapi.testclient import TestClient

from mortuary.config import Settings
from mortuary.database import Database
from mortuary.main import create_app


@pytest.fixture
def database(tmp_path):
    database = Database(f"sqlite:///{tmp_path / 'mortuary.db'}")
    database.create_tables()
    yield database
    database.dispose()


@pytest.fixture
def db(database):
    session = database.session()
    yield session
    session.close()


@pytest.fixture
def client(database):
    app = create_app(settings=Settings(API_KEY=None), database=database)
    with TestClient(app) as c:
        yield c
