# config/database.py
import os
from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote_plus
from pnctool.config.base import BaseConfig

@dataclass
class PostgresConfig(BaseConfig):
    """PostgreSQL database configuration"""
    db_name: str = "pnctool"
    db_user: str = "pnctool"
    db_password: str = "pnctool"
    db_host: str = "localhost"
    db_port: str = "5432"
    db_sslmode: str = "disable"
    connection_timeout: int = 30
    max_connections: int = 20
    query_timeout: float = 3.0  # seconds, applied to every store operation
    
    @classmethod
    def from_env(cls) -> 'PostgresConfig':
        return cls(
            db_name=os.getenv('DB_NAME', cls.db_name),
            db_user=os.getenv('DB_USER', cls.db_user),
            db_password=os.getenv('DB_PASSWORD', cls.db_password),
            db_host=os.getenv('DB_HOST', cls.db_host),
            db_port=os.getenv('DB_PORT', cls.db_port),
            db_sslmode=os.getenv('DB_SSLMODE', cls.db_sslmode),
            connection_timeout=cls.get_env_int('DB_CONNECTION_TIMEOUT', 30),
            max_connections=cls.get_env_int('DB_MAX_CONNECTIONS', 20),
            query_timeout=cls.get_env_float('DB_QUERY_TIMEOUT', 3.0)
        )
    
    @property
    def connection_string(self) -> str:
        """Generate PostgreSQL connection string"""
        # Quote the password so characters like '@' don't break URL parsing
        return (
            f"postgresql+psycopg2://{self.db_user}:{quote_plus(self.db_password)}"
            f"@{self.db_host}:{self.db_port}/{self.db_name}?sslmode={self.db_sslmode}"
        )

@dataclass
class DatabaseConfig(BaseConfig):
    """Main database configuration"""
    postgres: PostgresConfig = None
    url: Optional[str] = None  # full DSN, overrides the postgres settings
    
    def __post_init__(self):
        if self.postgres is None:
            self.postgres = PostgresConfig.from_env()
    
    @classmethod
    def from_env(cls) -> 'DatabaseConfig':
        return cls(
            postgres=PostgresConfig.from_env(),
            url=os.getenv('DATABASE_URL') or None
        )
    
    @property
    def connection_string(self) -> str:
        return self.url or self.postgres.connection_string
