# pnctool/repositories/camera_repository.py
from abc import ABC, abstractmethod
from typing import List
from pnctool.models.camera import Camera
from pnctool.models.filters import Filters

class CameraRepository(ABC):
    @abstractmethod
    def insert(self, camera: Camera) -> Camera:
        pass

    @abstractmethod
    def get(self, camera_id: int) -> Camera:
        pass
    
    @abstractmethod
    def get_all(self, name: str, mac_address: str, model_no: str, site_name: str,
                filters: Filters) -> List[Camera]:
        pass
    
    @abstractmethod
    def update(self, camera: Camera) -> Camera:
        pass
    
    @abstractmethod
    def delete(self, camera_id: int) -> None:
        pass
