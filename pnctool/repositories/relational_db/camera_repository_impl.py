# pnctool/repositories/relational_db/camera_repository_impl.py
from typing import List
from sqlalchemy import text, update, delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from pnctool.models.camera import Camera
from pnctool.models.filters import Filters, Filter, OrderBy
from pnctool.repositories.camera_repository import CameraRepository
from pnctool.repositories.errors import RecordNotFoundError, EditConflictError, StorageError
from pnctool.db.models import CameraModel
from pnctool.helpers.query_builder import apply_filters, apply_ordering, apply_pagination
import logging

logger = logging.getLogger(__name__)

DEFAULT_QUERY_TIMEOUT = 3.0

class CameraRepositoryImpl(CameraRepository):
    def __init__(self, session: Session, query_timeout: float = DEFAULT_QUERY_TIMEOUT):
        self.session = session
        self.query_timeout = query_timeout

    def _bound_statement_time(self):
        """Cap how long the statements of the current transaction may run.

        SET LOCAL lasts until commit or rollback, so every operation calls
        this before touching the table. Other backends rely on the pool and
        connect timeouts configured on the engine.
        """
        if self.session.get_bind().dialect.name == "postgresql":
            millis = int(self.query_timeout * 1000)
            self.session.execute(text(f"SET LOCAL statement_timeout = {millis}"))

    def insert(self, camera: Camera) -> Camera:
        try:
            self._bound_statement_time()
            camera_model = CameraModel(
                name=camera.name,
                mac_address=camera.mac_address,
                site_name=camera.site_name,
                model_no=camera.model_no,
                username=camera.username,
                password=camera.password,
            )
            self.session.add(camera_model)
            self.session.commit()
            self.session.refresh(camera_model)

            camera.id = camera_model.id
            camera.created_at = camera_model.created_at
            camera.version = camera_model.version
            return camera
            
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(f"Error inserting camera: {e}")
            raise StorageError("insert camera failed") from e

    def get(self, camera_id: int) -> Camera:
        if camera_id < 1:
            raise RecordNotFoundError()
        try:
            self._bound_statement_time()
            cam = self.session.query(CameraModel).filter_by(id=camera_id).first()
            camera = self._to_domain(cam) if cam else None
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(f"Error getting camera {camera_id}: {e}")
            raise StorageError(f"get camera {camera_id} failed") from e

        if camera is None:
            raise RecordNotFoundError()
        return camera
    
    def get_all(self, name: str, mac_address: str, model_no: str, site_name: str,
                filters: Filters) -> List[Camera]:
        conditions = []
        if name:
            conditions.append(Filter(column="name", type="ilike", value=name))
        if mac_address:
            conditions.append(Filter(column="mac_address", type="ieq", value=mac_address))
        if model_no:
            conditions.append(Filter(column="model_no", type="ieq", value=model_no))
        if site_name:
            conditions.append(Filter(column="site_name", type="ilike", value=site_name))

        ordering = [OrderBy(column=filters.sort_column(), order=filters.sort_direction())]
        if filters.sort_column() != "id":
            ordering.append(OrderBy(column="id", order="asc"))

        try:
            self._bound_statement_time()
            query = self.session.query(CameraModel)
            query = apply_filters(query, CameraModel, conditions)
            query = apply_ordering(query, CameraModel, ordering)
            query = apply_pagination(query, filters.page, filters.limit())
            cameras = [self._to_domain(cam) for cam in query.all()]
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(f"Error listing cameras with filters: {e}")
            raise StorageError("list cameras failed") from e

        return cameras
    
    def update(self, camera: Camera) -> Camera:
        # One conditional statement: the row only changes if nobody else
        # bumped the version since the caller read it.
        stmt = (
            update(CameraModel)
            .where(CameraModel.id == camera.id, CameraModel.version == camera.version)
            .values(
                name=camera.name,
                mac_address=camera.mac_address,
                site_name=camera.site_name,
                model_no=camera.model_no,
                username=camera.username,
                password=camera.password,
                version=CameraModel.version + 1,
            )
            .execution_options(synchronize_session=False)
        )
        try:
            self._bound_statement_time()
            result = self.session.execute(stmt)
            if result.rowcount == 0:
                self.session.rollback()
                raise EditConflictError()
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(f"Error updating camera {camera.id}: {e}")
            raise StorageError(f"update camera {camera.id} failed") from e

        camera.version += 1
        return camera
    
    def delete(self, camera_id: int) -> None:
        if camera_id < 1:
            raise RecordNotFoundError()
        try:
            self._bound_statement_time()
            result = self.session.execute(
                delete(CameraModel)
                .where(CameraModel.id == camera_id)
                .execution_options(synchronize_session=False)
            )
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(f"Error deleting camera {camera_id}: {e}")
            raise StorageError(f"delete camera {camera_id} failed") from e

        if result.rowcount == 0:
            raise RecordNotFoundError()

    def _to_domain(self, model: CameraModel) -> Camera:
        """Convert SQLAlchemy model to domain model"""
        return Camera(
            id=model.id,
            created_at=model.created_at,
            name=model.name,
            mac_address=model.mac_address,
            site_name=model.site_name,
            model_no=model.model_no,
            username=model.username,
            password=model.password,
            version=model.version,
        )
