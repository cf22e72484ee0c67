# config/settings.py
from dataclasses import dataclass
import os
from .base import BaseConfig
from .database import DatabaseConfig

VERSION = "1.0.0"

@dataclass
class AppConfig(BaseConfig):
    """Main application configuration"""
    env: str = "development"
    version: str = VERSION
    host: str = "0.0.0.0"
    port: int = 4000
    log_level: str = "INFO"
    debug: bool = False
    max_body_bytes: int = 1_048_576
    
    # Component configurations
    database: DatabaseConfig = None
    
    def __post_init__(self):
        if self.database is None:
            self.database = DatabaseConfig.from_env()
        
    @classmethod
    def from_env(cls) -> 'AppConfig':
        """Create complete configuration from environment variables"""
        return cls(
            env=os.getenv('APP_ENV', 'development'),
            host=os.getenv('HOST', '0.0.0.0'),
            port=cls.get_env_int('PORT', 4000),
            log_level=os.getenv('LOG_LEVEL', 'INFO'),
            debug=cls.get_env_bool('DEBUG', False),
            max_body_bytes=cls.get_env_int('MAX_BODY_BYTES', 1_048_576),
            database=DatabaseConfig.from_env()
        )
        
    def validate(self) -> bool:
        """Validate configuration settings"""
        errors = []
        
        if self.env not in ("development", "staging", "production"):
            errors.append(f"Unknown environment: {self.env}")
        
        if not 0 < self.port < 65536:
            errors.append(f"Port out of range: {self.port}")
        
        if self.max_body_bytes <= 0:
            errors.append("MAX_BODY_BYTES must be positive")
        
        if self.database.url is None and not all([self.database.postgres.db_host, self.database.postgres.db_name]):
            errors.append("Database configuration incomplete")
        
        if errors:
            print("Configuration validation errors:")
            for error in errors:
                print(f"  - {error}")
            return False
        
        return True
