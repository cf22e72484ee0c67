import sys
import logging
from dotenv import load_dotenv

from pnctool.config import AppConfig
from pnctool.di.dependencies import initialize_dependencies, shutdown_dependencies
from pnctool.api.server import CameraAPIServer

load_dotenv()

_config = AppConfig.from_env()

logging.basicConfig(
    level=getattr(logging, _config.log_level.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def main():
    if not _config.validate():
        logger.error("Configuration validation failed")
        sys.exit(1)

    container = initialize_dependencies(_config)
    try:
        container.db_manager.create_tables()
        CameraAPIServer(_config, container).run()
    finally:
        shutdown_dependencies()


if __name__ == "__main__":
    try:
        logger.info("===== PNC Tool Camera API Starting =====")
        logger.info(f"Environment: {_config.env}, version {_config.version}")
        main()
    except KeyboardInterrupt:
        logger.info("Application terminated by user")
    except Exception as e:
        logger.error(f"Fatal error: {e}")
        sys.exit(1)
