import logging
from typing import Dict, Union

from fastapi import Request
from fastapi.responses import JSONResponse

from pnctool.api.helpers import write_json

logger = logging.getLogger(__name__)


def log_error(request: Request, err: Exception):
    logger.error(f"{request.method} {request.url.path}: {err!r}")


def error_response(request: Request, status: int, message: Union[str, Dict[str, str]]) -> JSONResponse:
    return write_json(status, {"error": message})


def server_error_response(request: Request, err: Exception) -> JSONResponse:
    """Log the real failure, tell the client nothing about it"""
    log_error(request, err)
    message = "the server encountered a problem and could not process your request"
    return error_response(request, 500, message)


def not_found_response(request: Request) -> JSONResponse:
    return error_response(request, 404, "the requested resource could not be found")


def method_not_allowed_response(request: Request) -> JSONResponse:
    message = f"the {request.method} method is not supported for this resource"
    return error_response(request, 405, message)


def bad_request_response(request: Request, err: Exception) -> JSONResponse:
    return error_response(request, 400, str(err))


def failed_validation_response(request: Request, errors: Dict[str, str]) -> JSONResponse:
    return error_response(request, 422, errors)


def edit_conflict_response(request: Request) -> JSONResponse:
    message = "unable to update the record due to an edit conflict, please try again"
    return error_response(request, 409, message)
