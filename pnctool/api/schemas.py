"""
Camera request/response schemas
===============================

Pydantic models for the bodies the camera endpoints accept and return.
Inputs forbid unknown keys and do not coerce types, so a client sending
``{"name": 5}`` or ``{"nmae": "x"}`` gets a 400 instead of a silent fix-up.
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from pnctool.models.camera import Camera


class CameraCreateInput(BaseModel):
    """Body of POST /cameras. Missing fields are left empty for validation to report."""
    model_config = ConfigDict(extra="forbid", strict=True)

    name: str = ""
    mac_address: str = ""
    site_name: str = ""
    model_no: str = ""
    username: str = ""
    password: str = ""


class CameraUpdateInput(BaseModel):
    """Body of PATCH /cameras/{id}. Only keys present with a non-null value are applied."""
    model_config = ConfigDict(extra="forbid", strict=True)

    name: Optional[str] = None
    mac_address: Optional[str] = None
    site_name: Optional[str] = None
    model_no: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None

    def apply_to(self, camera: Camera) -> Camera:
        for field, value in self.model_dump(exclude_unset=True).items():
            if value is not None:
                setattr(camera, field, value)
        return camera


class CameraResponse(BaseModel):
    """Public view of a camera; credentials never leave the service."""
    id: int
    created_at: datetime
    name: str
    mac_address: str
    site_name: str
    model_no: str
    version: int

    @classmethod
    def from_domain(cls, camera: Camera) -> "CameraResponse":
        return cls(
            id=camera.id,
            created_at=camera.created_at,
            name=camera.name,
            mac_address=camera.mac_address,
            site_name=camera.site_name,
            model_no=camera.model_no,
            version=camera.version,
        )
