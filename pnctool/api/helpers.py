import json
import re
from typing import Any, Dict, Mapping, Optional, Type, TypeVar

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError

from pnctool.helpers.validator import Validator

T = TypeVar("T", bound=BaseModel)

INT_RX = re.compile(r"[+-]?[0-9]+")

# ids are 64-bit in storage
MAX_ID = 2**63 - 1


class MalformedBodyError(Exception):
    """The request body could not be decoded into the expected input"""


def read_id_param(raw: str) -> int:
    """Parse the {id} path parameter; anything but a positive integer is invalid"""
    if not INT_RX.fullmatch(raw):
        raise ValueError("invalid id parameter")
    camera_id = int(raw)
    if camera_id < 1 or camera_id > MAX_ID:
        raise ValueError("invalid id parameter")
    return camera_id


def write_json(status: int, data: Dict[str, Any], headers: Optional[Dict[str, str]] = None) -> JSONResponse:
    """Build a JSON response around an envelope such as {"camera": ...}"""
    return JSONResponse(content=jsonable_encoder(data), status_code=status, headers=headers)


def read_json(body: bytes, max_bytes: int, model: Type[T]) -> T:
    """Decode exactly one JSON object from the body into the given input model.

    Every failure is raised as MalformedBodyError with a message that is
    safe to show to the client.
    """
    if len(body) > max_bytes:
        raise MalformedBodyError(f"body must not be larger than {max_bytes} bytes")
    if not body.strip():
        raise MalformedBodyError("body must not be empty")

    try:
        data = json.loads(body)
    except json.JSONDecodeError as e:
        if e.msg == "Extra data":
            raise MalformedBodyError("body must only contain a single JSON value") from e
        raise MalformedBodyError(f"body contains badly-formed JSON (at character {e.pos})") from e
    except UnicodeDecodeError as e:
        raise MalformedBodyError("body contains badly-formed JSON") from e

    if not isinstance(data, dict):
        raise MalformedBodyError("body contains incorrect JSON type (expected an object)")

    try:
        return model.model_validate(data)
    except ValidationError as e:
        err = e.errors()[0]
        field = err["loc"][0] if err["loc"] else ""
        if err["type"] == "extra_forbidden":
            raise MalformedBodyError(f'body contains unknown key "{field}"') from e
        raise MalformedBodyError(f'body contains incorrect JSON type for field "{field}"') from e


def read_string(qs: Mapping[str, str], key: str, default: str) -> str:
    value = qs.get(key)
    if not value:
        return default
    return value


def read_int(qs: Mapping[str, str], key: str, default: int, v: Validator) -> int:
    """Read an integer query value, recording a validation error if it is not one"""
    value = qs.get(key)
    if not value:
        return default
    if not INT_RX.fullmatch(value):
        v.add_error(key, "must be an integer value")
        return default
    return int(value)
