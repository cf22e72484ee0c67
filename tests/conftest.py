"""Shared fixtures: an in-memory SQLite store and a TestClient around the app."""

import pytest
from fastapi.testclient import TestClient

from pnctool.api.server import create_app
from pnctool.config import AppConfig, DatabaseConfig, PostgresConfig
from pnctool.di.dependencies import DependencyContainer
from pnctool.models.camera import Camera
from pnctool.repositories.relational_db.camera_repository_impl import CameraRepositoryImpl


@pytest.fixture()
def config():
    return AppConfig(
        env="development",
        max_body_bytes=1_048_576,
        database=DatabaseConfig(postgres=PostgresConfig(), url="sqlite://"),
    )


@pytest.fixture()
def container(config):
    container = DependencyContainer(config)
    container.db_manager.create_tables()
    yield container
    container.close()


@pytest.fixture()
def session(container):
    session = container.db_manager.get_session()
    yield session
    session.close()


@pytest.fixture()
def repo(session):
    return CameraRepositoryImpl(session)


@pytest.fixture()
def app(config, container):
    return create_app(config, container)


@pytest.fixture()
def client(app):
    with TestClient(app) as client:
        yield client


def make_camera(**overrides) -> Camera:
    fields = {
        "name": "Lobby Cam",
        "mac_address": "ACCC85930342",
        "site_name": "NYC-5thAve-OPS",
        "model_no": "X100",
    }
    fields.update(overrides)
    return Camera(**fields)
