from typing import Generator

from fastapi import Request

from pnctool.usecases.camera_usecase import CameraUseCase


def get_camera_usecase(request: Request) -> Generator[CameraUseCase, None, None]:
    """Per-request CameraUseCase backed by its own database session"""
    with request.app.state.container.get_camera_usecase_context() as usecase:
        yield usecase


async def read_body(request: Request) -> bytes:
    """Read the request body, stopping one chunk past the configured size limit"""
    limit = request.app.state.config.max_body_bytes
    body = bytearray()
    async for chunk in request.stream():
        body.extend(chunk)
        if len(body) > limit:
            break
    return bytes(body)
