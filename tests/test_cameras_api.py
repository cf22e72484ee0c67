"""Tests for the /cameras and /healthcheck endpoints.

Covers:
- POST /cameras - create, body decoding rules, validation
- GET /cameras/{id} - show, invalid ids
- PATCH /cameras/{id} - partial update and edit conflicts
- DELETE /cameras/{id}
- GET /cameras - filters, sorting, pagination, filter validation
- error envelope for unknown routes, methods and unhandled failures
"""
from unittest.mock import MagicMock

import pytest

from pnctool.api.dependencies import get_camera_usecase
from pnctool.repositories.errors import EditConflictError, StorageError
from pnctool.usecases.camera_usecase import CameraUseCase

from conftest import make_camera

LOBBY_CAM = {
    "name": "Lobby Cam",
    "mac_address": "ACCC85930342",
    "site_name": "NYC-5thAve-OPS",
    "model_no": "X100",
}


def _create(client, **overrides):
    body = dict(LOBBY_CAM, **overrides)
    response = client.post("/cameras", json=body)
    assert response.status_code == 201, response.text
    return response.json()["camera"]


@pytest.fixture()
def fake_usecase(app):
    usecase = MagicMock(spec=CameraUseCase)
    app.dependency_overrides[get_camera_usecase] = lambda: usecase
    yield usecase
    app.dependency_overrides.clear()


# =============================================================================
# Create
# =============================================================================

def test_create_camera(client):
    response = client.post("/cameras", json=LOBBY_CAM)

    assert response.status_code == 201
    camera = response.json()["camera"]
    assert response.headers["Location"] == f"/cameras/{camera['id']}"
    assert camera["id"] >= 1
    assert camera["version"] == 1
    assert camera["created_at"]
    for key, value in LOBBY_CAM.items():
        assert camera[key] == value


def test_create_never_echoes_credentials(client):
    camera = _create(client, username="root", password="hunter2")
    assert "username" not in camera
    assert "password" not in camera

    shown = client.get(f"/cameras/{camera['id']}").json()["camera"]
    assert "username" not in shown
    assert "password" not in shown


@pytest.mark.parametrize("overrides, field", [
    ({"name": ""}, "name"),
    ({"name": "n" * 501}, "name"),
    ({"mac_address": "ACCC"}, "mac_address"),
    ({"site_name": "NYC-5thAve-HQ"}, "site_name"),
    ({"site_name": "NYC-5thAve-OPS\n"}, "site_name"),
])
def test_create_validation_failure_lists_field_and_inserts_nothing(client, overrides, field):
    response = client.post("/cameras", json=dict(LOBBY_CAM, **overrides))

    assert response.status_code == 422
    assert list(response.json()["error"]) == [field]
    assert client.get("/cameras").json() == {"cameras": []}


def test_create_reports_all_failing_fields_at_once(client):
    response = client.post("/cameras", json={"model_no": "X100"})

    assert response.status_code == 422
    assert set(response.json()["error"]) == {"name", "mac_address", "site_name"}


@pytest.mark.parametrize("body, message", [
    (b'{"name": "Lobby Cam"', "body contains badly-formed JSON"),
    (b'', "body must not be empty"),
    (b'{"name": "a"} {"name": "b"}', "body must only contain a single JSON value"),
    (b'{"name": "a", "colour": "red"}', 'body contains unknown key "colour"'),
    (b'{"name": 5}', 'body contains incorrect JSON type for field "name"'),
    (b'["Lobby Cam"]', "body contains incorrect JSON type"),
])
def test_create_rejects_malformed_bodies(client, body, message):
    response = client.post("/cameras", content=body, headers={"Content-Type": "application/json"})

    assert response.status_code == 400
    assert response.json()["error"].startswith(message)


def test_create_rejects_oversized_body(client, config):
    config.max_body_bytes = 64
    body = dict(LOBBY_CAM, model_no="x" * 100)

    response = client.post("/cameras", json=body)

    assert response.status_code == 400
    assert response.json() == {"error": "body must not be larger than 64 bytes"}


def test_create_storage_fault_is_500_without_details(client, fake_usecase):
    fake_usecase.create_camera.side_effect = StorageError("duplicate key value violates constraint")

    response = client.post("/cameras", json=LOBBY_CAM)

    assert response.status_code == 500
    assert "constraint" not in response.text


# =============================================================================
# Show
# =============================================================================

def test_show_camera_round_trip(client):
    created = _create(client)

    response = client.get(f"/cameras/{created['id']}")

    assert response.status_code == 200
    assert response.json() == {"camera": created}


@pytest.mark.parametrize("path", [
    "/cameras/abc", "/cameras/0", "/cameras/-1", "/cameras/1.5", "/cameras/999",
    "/cameras/99999999999999999999999",
])
def test_show_bad_or_missing_id_is_404(client, path):
    response = client.get(path)

    assert response.status_code == 404
    assert response.json() == {"error": "the requested resource could not be found"}


# =============================================================================
# Update
# =============================================================================

def test_partial_update_changes_only_given_fields(client):
    created = _create(client)

    response = client.patch(f"/cameras/{created['id']}", json={"name": "Lobby Cam 2", "model_no": None})

    assert response.status_code == 200
    camera = response.json()["camera"]
    assert camera["name"] == "Lobby Cam 2"
    assert camera["model_no"] == "X100"
    assert camera["mac_address"] == created["mac_address"]
    assert camera["version"] == 2
    assert client.get(f"/cameras/{created['id']}").json()["camera"] == camera


def test_update_with_stale_expected_version_is_409_and_unchanged(client):
    created = _create(client)
    client.patch(f"/cameras/{created['id']}", json={"model_no": "X200"})

    response = client.patch(
        f"/cameras/{created['id']}",
        json={"name": "Lobby Cam 2"},
        headers={"X-Expected-Version": "1"},
    )

    assert response.status_code == 409
    stored = client.get(f"/cameras/{created['id']}").json()["camera"]
    assert stored["name"] == "Lobby Cam"
    assert stored["version"] == 2


def test_update_with_current_expected_version_succeeds(client):
    created = _create(client)

    response = client.patch(
        f"/cameras/{created['id']}",
        json={"name": "Lobby Cam 2"},
        headers={"X-Expected-Version": "1"},
    )

    assert response.status_code == 200
    assert response.json()["camera"]["version"] == 2


def test_update_lost_race_is_409(client, fake_usecase):
    fake_usecase.get_camera.return_value = make_camera(id=1, version=3)
    fake_usecase.update_camera.side_effect = EditConflictError()

    response = client.patch("/cameras/1", json={"name": "Lobby Cam 2"})

    assert response.status_code == 409
    assert response.json() == {
        "error": "unable to update the record due to an edit conflict, please try again"
    }


def test_update_validation_failure(client):
    created = _create(client)

    response = client.patch(f"/cameras/{created['id']}", json={"mac_address": "short"})

    assert response.status_code == 422
    assert response.json() == {"error": {"mac_address": "must be 12 characters"}}
    assert client.get(f"/cameras/{created['id']}").json()["camera"]["version"] == 1


def test_update_unknown_field_is_400(client):
    created = _create(client)

    response = client.patch(f"/cameras/{created['id']}", json={"version": 7})

    assert response.status_code == 400
    assert response.json() == {"error": 'body contains unknown key "version"'}


@pytest.mark.parametrize("path", ["/cameras/999", "/cameras/abc"])
def test_update_missing_camera_is_404(client, path):
    response = client.patch(path, json={"name": "Lobby Cam 2"})
    assert response.status_code == 404


# =============================================================================
# Delete
# =============================================================================

def test_delete_camera(client):
    created = _create(client)

    response = client.delete(f"/cameras/{created['id']}")

    assert response.status_code == 200
    assert response.json() == {"message": "camera successfully deleted"}
    assert client.get(f"/cameras/{created['id']}").status_code == 404
    assert client.delete(f"/cameras/{created['id']}").status_code == 404


def test_delete_bad_id_is_404(client):
    assert client.delete("/cameras/abc").status_code == 404


# =============================================================================
# List
# =============================================================================

def test_list_empty(client):
    response = client.get("/cameras")

    assert response.status_code == 200
    assert response.json() == {"cameras": []}


def test_list_sort_page_and_filter(client):
    names = ["Charlie", "Alpha", "Bravo"]
    for i, name in enumerate(names):
        _create(client, name=name, mac_address=f"ACCC8593034{i}")

    by_id = client.get("/cameras").json()["cameras"]
    assert [c["name"] for c in by_id] == names

    by_name = client.get("/cameras", params={"sort": "-name"}).json()["cameras"]
    assert [c["name"] for c in by_name] == ["Charlie", "Bravo", "Alpha"]

    page = client.get("/cameras", params={"sort": "name", "page": 2, "page_size": 2}).json()["cameras"]
    assert [c["name"] for c in page] == ["Charlie"]

    filtered = client.get("/cameras", params={"name": "alp"}).json()["cameras"]
    assert [c["name"] for c in filtered] == ["Alpha"]

    assert client.get("/cameras").json()["cameras"] == by_id


@pytest.mark.parametrize("params, field", [
    ({"page": 0}, "page"),
    ({"page_size": 101}, "page_size"),
    ({"sort": "unknown"}, "sort"),
    ({"page": "abc"}, "page"),
    ({"page_size": "1_0"}, "page_size"),
    ({"page": " 5"}, "page"),
])
def test_list_invalid_filters_is_422_and_store_not_called(client, fake_usecase, params, field):
    response = client.get("/cameras", params=params)

    assert response.status_code == 422
    assert list(response.json()["error"]) == [field]
    fake_usecase.list_cameras.assert_not_called()


def test_list_integer_parse_error_message(client):
    response = client.get("/cameras", params={"page_size": "ten"})
    assert response.json() == {"error": {"page_size": "must be an integer value"}}


def test_list_passes_filters_to_store(client, fake_usecase):
    fake_usecase.list_cameras.return_value = []

    client.get("/cameras", params={
        "name": "Lobby", "mac_address": "ACCC85930342", "model_no": "X100",
        "site_name": "NYC", "page": 3, "page_size": 10, "sort": "-site_name",
    })

    name, mac_address, model_no, site_name, filters = fake_usecase.list_cameras.call_args.args
    assert (name, mac_address, model_no, site_name) == ("Lobby", "ACCC85930342", "X100", "NYC")
    assert (filters.page, filters.page_size, filters.sort) == (3, 10, "-site_name")


# =============================================================================
# Plumbing
# =============================================================================

def test_healthcheck(client):
    response = client.get("/healthcheck")

    assert response.status_code == 200
    assert response.json() == {
        "status": "available",
        "system_info": {"environment": "development", "version": "1.0.0"},
    }


def test_unknown_route_is_404_envelope(client):
    response = client.get("/nowhere")

    assert response.status_code == 404
    assert response.json() == {"error": "the requested resource could not be found"}


def test_wrong_method_is_405_envelope(client):
    response = client.put("/cameras/1", json=LOBBY_CAM)

    assert response.status_code == 405
    assert response.json() == {"error": "the PUT method is not supported for this resource"}


def test_unhandled_failure_is_500_and_closes_connection(client, fake_usecase):
    fake_usecase.get_camera.side_effect = RuntimeError("boom")

    response = client.get("/cameras/1")

    assert response.status_code == 500
    assert response.headers["Connection"] == "close"
    assert response.json() == {
        "error": "the server encountered a problem and could not process your request"
    }
