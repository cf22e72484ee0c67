# config/__init__.py
from .settings import AppConfig
from .database import DatabaseConfig, PostgresConfig

__all__ = [
    'AppConfig',
    'DatabaseConfig',
    'PostgresConfig'
]
