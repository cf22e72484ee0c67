# pnctool/models/camera.py
import re
from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from pnctool.helpers.validator import Validator, matches

# <city>-<street>-<office type>, e.g. NYC-5thAve-OPS
SITE_NAME_RX = re.compile(r".*-.*-(OPS|COE|GLH)\Z")

MAX_NAME_BYTES = 500
MAC_ADDRESS_LENGTH = 12

@dataclass
class Camera:
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    name: str = ""
    mac_address: str = ""
    site_name: str = ""
    model_no: str = ""
    username: str = ""
    password: str = ""
    version: int = 0


def validate_camera(v: Validator, camera: Camera):
    """Run every camera field rule, recording failures on the validator"""
    v.check(camera.name != "", "name", "must be provided")
    v.check(len(camera.name.encode("utf-8")) <= MAX_NAME_BYTES, "name",
            f"must not be more than {MAX_NAME_BYTES} bytes long")
    v.check(len(camera.mac_address) == MAC_ADDRESS_LENGTH, "mac_address",
            f"must be {MAC_ADDRESS_LENGTH} characters")
    v.check(matches(camera.site_name, SITE_NAME_RX), "site_name",
            "must be like 'City-Street_Number-Office_Type'")
