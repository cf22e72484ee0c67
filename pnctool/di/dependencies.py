# pnctool/di/dependencies.py
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import QueuePool, StaticPool
from contextlib import contextmanager
from typing import Generator
import logging

from pnctool.config import AppConfig
from pnctool.db.models import Base
from pnctool.usecases.camera_usecase import CameraUseCase
from pnctool.repositories.relational_db.camera_repository_impl import CameraRepositoryImpl

logger = logging.getLogger(__name__)

class DatabaseManager:
    """Manages database connections and sessions"""
    
    def __init__(self, config: AppConfig):
        self.config: AppConfig = config
        self._engine = None
        self._session_factory = None
        self._initialize_database()
    
    def _initialize_database(self):
        """Initialize database engine and session factory"""
        try:
            database_url = self.config.database.connection_string
            postgres = self.config.database.postgres

            if database_url.startswith("sqlite"):
                # One shared in-process connection; used for local runs and tests
                logger.info("Initializing SQLite database")
                self._engine = create_engine(
                    database_url,
                    poolclass=StaticPool,
                    echo=self.config.debug,
                    connect_args={"check_same_thread": False}
                )
            else:
                logger.info(f"Initializing database connection to: {postgres.db_host}")
                self._engine = create_engine(
                    database_url,
                    poolclass=QueuePool,
                    pool_size=postgres.max_connections,
                    max_overflow=10,
                    pool_timeout=postgres.connection_timeout,
                    pool_recycle=3600,  # Recycle connections after 1 hour
                    pool_pre_ping=True,
                    echo=self.config.debug,  # Log SQL queries in debug mode
                    connect_args={"connect_timeout": postgres.connection_timeout}
                )
            
            self._session_factory = sessionmaker(
                bind=self._engine,
                autocommit=False,
                autoflush=False
            )
            
            logger.info("Database initialized successfully")
            
        except Exception as e:
            logger.error(f"Failed to initialize database: {e}")
            raise
    
    @property
    def engine(self):
        """Get database engine"""
        return self._engine
    
    def create_tables(self):
        """Create the tables the service needs (safe to run repeatedly)"""
        Base.metadata.create_all(self._engine)
        logger.info("Ensured required tables exist")
    
    def get_session(self) -> Session:
        """Get a new database session"""
        if not self._session_factory:
            raise RuntimeError("Database not initialized")
        return self._session_factory()
    
    @contextmanager
    def get_session_context(self) -> Generator[Session, None, None]:
        """Get database session with automatic cleanup"""
        session = self.get_session()
        try:
            yield session
            session.commit()
        except Exception as e:
            session.rollback()
            logger.error(f"Database session error: {e}")
            raise
        finally:
            session.close()
    
    def close(self):
        """Close database connections"""
        if self._engine:
            self._engine.dispose()
            logger.info("Database connections closed")


class DependencyContainer:
    """Dependency injection container"""
    
    def __init__(self, config: AppConfig):
        self.config = config
        self.db_manager = DatabaseManager(config)
        logger.info("Dependency container initialized")
    
    @contextmanager
    def get_camera_usecase_context(self) -> Generator[CameraUseCase, None, None]:
        """Get CameraUseCase bound to a fresh session, closed on exit"""
        with self.db_manager.get_session_context() as session:
            camera_repo = CameraRepositoryImpl(
                session,
                query_timeout=self.config.database.postgres.query_timeout
            )
            yield CameraUseCase(camera_repo)
    
    def close(self):
        """Close all resources"""
        self.db_manager.close()


# Global dependency container (initialized later)
_container: DependencyContainer = None


def initialize_dependencies(config: AppConfig) -> DependencyContainer:
    """Initialize the global dependency container"""
    global _container
    _container = DependencyContainer(config)
    logger.info("Global dependencies initialized")
    return _container


def shutdown_dependencies():
    """Shutdown all dependencies"""
    global _container
    if _container:
        _container.close()
        _container = None
    logger.info("Dependencies shutdown complete")
