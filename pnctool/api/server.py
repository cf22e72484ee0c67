# pnctool/api/server.py
import logging

import uvicorn
from fastapi import FastAPI, Request
from starlette.exceptions import HTTPException as StarletteHTTPException

from pnctool.api import cameras, healthcheck
from pnctool.api.errors import error_response, method_not_allowed_response, not_found_response, server_error_response
from pnctool.config import AppConfig
from pnctool.di.dependencies import DependencyContainer

logger = logging.getLogger(__name__)


class CameraAPIServer:
    """FastAPI application serving the camera inventory endpoints"""
    
    def __init__(self, config: AppConfig, container: DependencyContainer):
        self.config = config
        self.container = container
        self.app = FastAPI(
            title="PNC Tool Camera API",
            description="Inventory of managed cameras with optimistic-concurrency updates",
            version=config.version
        )
        self.app.state.config = config
        self.app.state.container = container
        
        self._setup_routes()
        self._setup_error_handlers()
        self._setup_middleware()
    
    def _setup_routes(self):
        """Register the endpoint routers"""
        self.app.include_router(healthcheck.router)
        self.app.include_router(cameras.router)
    
    def _setup_error_handlers(self):
        """Answer unknown routes and methods with the usual JSON envelope"""
        
        @self.app.exception_handler(StarletteHTTPException)
        async def http_exception_handler(request: Request, exc: StarletteHTTPException):
            if exc.status_code == 404:
                return not_found_response(request)
            if exc.status_code == 405:
                return method_not_allowed_response(request)
            return error_response(request, exc.status_code, str(exc.detail))
    
    def _setup_middleware(self):
        """Turn any unhandled exception into a 500 instead of dropping the request"""
        
        @self.app.middleware("http")
        async def recover_panic(request: Request, call_next):
            try:
                return await call_next(request)
            except Exception as e:
                response = server_error_response(request, e)
                # Don't reuse a connection that may be in a bad state
                response.headers["Connection"] = "close"
                return response
    
    def run(self):
        """Serve the application until interrupted"""
        logger.info(f"Starting {self.config.env} server on {self.config.host}:{self.config.port}")
        uvicorn.run(
            self.app,
            host=self.config.host,
            port=self.config.port,
            log_level=self.config.log_level.lower()
        )


def create_app(config: AppConfig, container: DependencyContainer) -> FastAPI:
    return CameraAPIServer(config, container).app
