"""
Camera Controller
=================

Handlers for the /cameras endpoints. Each one parses and validates its
input, makes a single store call (PATCH reads the record first to learn
its version) and maps every store outcome to a status code itself.
"""

from fastapi import APIRouter, Depends, Request

from pnctool.api.dependencies import get_camera_usecase, read_body
from pnctool.api.errors import (
    bad_request_response,
    edit_conflict_response,
    failed_validation_response,
    not_found_response,
    server_error_response,
)
from pnctool.api.helpers import MalformedBodyError, read_id_param, read_int, read_json, read_string, write_json
from pnctool.api.schemas import CameraCreateInput, CameraResponse, CameraUpdateInput
from pnctool.helpers.validator import Validator
from pnctool.models.camera import Camera, validate_camera
from pnctool.models.filters import Filters, validate_filters
from pnctool.repositories.errors import EditConflictError, RecordNotFoundError, StorageError
from pnctool.usecases.camera_usecase import CameraUseCase

router = APIRouter(tags=["cameras"])

CAMERA_SORT_SAFELIST = [
    "id", "name", "mac_address", "site_name", "model_no",
    "-id", "-name", "-mac_address", "-site_name", "-model_no",
]

DEFAULT_PAGE_SIZE = 20


@router.post("/cameras", status_code=201)
def create_camera_handler(
    request: Request,
    body: bytes = Depends(read_body),
    usecase: CameraUseCase = Depends(get_camera_usecase),
):
    try:
        data = read_json(body, request.app.state.config.max_body_bytes, CameraCreateInput)
    except MalformedBodyError as e:
        return bad_request_response(request, e)

    camera = Camera(**data.model_dump())

    v = Validator()
    validate_camera(v, camera)
    if not v.valid():
        return failed_validation_response(request, v.errors)

    try:
        usecase.create_camera(camera)
    except StorageError as e:
        return server_error_response(request, e)

    # Let the client know where the new resource lives
    headers = {"Location": f"/cameras/{camera.id}"}
    return write_json(201, {"camera": CameraResponse.from_domain(camera)}, headers)


@router.get("/cameras/{id}")
def show_camera_handler(
    id: str,
    request: Request,
    usecase: CameraUseCase = Depends(get_camera_usecase),
):
    try:
        camera_id = read_id_param(id)
    except ValueError:
        return not_found_response(request)

    try:
        camera = usecase.get_camera(camera_id)
    except RecordNotFoundError:
        return not_found_response(request)
    except StorageError as e:
        return server_error_response(request, e)

    return write_json(200, {"camera": CameraResponse.from_domain(camera)})


@router.patch("/cameras/{id}")
def update_camera_handler(
    id: str,
    request: Request,
    body: bytes = Depends(read_body),
    usecase: CameraUseCase = Depends(get_camera_usecase),
):
    try:
        camera_id = read_id_param(id)
    except ValueError:
        return not_found_response(request)

    try:
        camera = usecase.get_camera(camera_id)
    except RecordNotFoundError:
        return not_found_response(request)
    except StorageError as e:
        return server_error_response(request, e)

    # Clients may pin the version they last read
    expected = request.headers.get("X-Expected-Version")
    if expected is not None and expected.strip() != str(camera.version):
        return edit_conflict_response(request)

    try:
        patch = read_json(body, request.app.state.config.max_body_bytes, CameraUpdateInput)
    except MalformedBodyError as e:
        return bad_request_response(request, e)

    patch.apply_to(camera)

    v = Validator()
    validate_camera(v, camera)
    if not v.valid():
        return failed_validation_response(request, v.errors)

    try:
        usecase.update_camera(camera)
    except EditConflictError:
        return edit_conflict_response(request)
    except StorageError as e:
        return server_error_response(request, e)

    return write_json(200, {"camera": CameraResponse.from_domain(camera)})


@router.delete("/cameras/{id}")
def delete_camera_handler(
    id: str,
    request: Request,
    usecase: CameraUseCase = Depends(get_camera_usecase),
):
    try:
        camera_id = read_id_param(id)
    except ValueError:
        return not_found_response(request)

    try:
        usecase.delete_camera(camera_id)
    except RecordNotFoundError:
        return not_found_response(request)
    except StorageError as e:
        return server_error_response(request, e)

    return write_json(200, {"message": "camera successfully deleted"})


@router.get("/cameras")
def list_cameras_handler(
    request: Request,
    usecase: CameraUseCase = Depends(get_camera_usecase),
):
    qs = request.query_params
    v = Validator()

    name = read_string(qs, "name", "")
    mac_address = read_string(qs, "mac_address", "")
    model_no = read_string(qs, "model_no", "")
    site_name = read_string(qs, "site_name", "")

    filters = Filters(
        page=read_int(qs, "page", 1, v),
        page_size=read_int(qs, "page_size", DEFAULT_PAGE_SIZE, v),
        sort=read_string(qs, "sort", "id"),
        sort_safelist=CAMERA_SORT_SAFELIST,
    )

    validate_filters(v, filters)
    if not v.valid():
        return failed_validation_response(request, v.errors)

    try:
        cameras = usecase.list_cameras(name, mac_address, model_no, site_name, filters)
    except StorageError as e:
        return server_error_response(request, e)

    return write_json(200, {"cameras": [CameraResponse.from_domain(c) for c in cameras]})
