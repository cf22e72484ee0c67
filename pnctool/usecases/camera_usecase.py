# pnctool/usecases/camera_usecase.py
import logging
from typing import List
from pnctool.repositories.camera_repository import CameraRepository
from pnctool.repositories.errors import RecordNotFoundError, EditConflictError
from pnctool.models.camera import Camera
from pnctool.models.filters import Filters

logger = logging.getLogger(__name__)

class CameraUseCase:
    def __init__(self, camera_repository: CameraRepository):
        self.camera_repo = camera_repository
    
    def get_camera(self, camera_id: int) -> Camera:
        """Get camera by ID"""
        try:
            return self.camera_repo.get(camera_id)
        except RecordNotFoundError:
            raise
        except Exception as e:
            logger.error(f"Error getting camera: {e}")
            raise
    
    def list_cameras(self, name: str, mac_address: str, model_no: str, site_name: str,
                     filters: Filters) -> List[Camera]:
        """List cameras matching the optional field filters, one page at a time"""
        try:
            return self.camera_repo.get_all(name, mac_address, model_no, site_name, filters)
        except Exception as e:
            logger.error(f"Error listing cameras: {e}")
            raise
    
    def create_camera(self, camera: Camera) -> Camera:
        """Create a new camera"""
        try:
            return self.camera_repo.insert(camera)
        except Exception as e:
            logger.error(f"Error creating camera: {e}")
            raise
    
    def update_camera(self, camera: Camera) -> Camera:
        """Write the camera back if its version is still the stored one"""
        try:
            return self.camera_repo.update(camera)
        except EditConflictError:
            logger.info(f"Edit conflict on camera {camera.id} at version {camera.version}")
            raise
        except Exception as e:
            logger.error(f"Error updating camera: {e}")
            raise
    
    def delete_camera(self, camera_id: int) -> None:
        """Delete camera"""
        try:
            self.camera_repo.delete(camera_id)
        except RecordNotFoundError:
            raise
        except Exception as e:
            logger.error(f"Error deleting camera: {e}")
            raise
