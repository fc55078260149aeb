import os
import logging
import uvicorn

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)

if os.environ.get("DEBUG", "0") == "1":
    logging.getLogger().setLevel(logging.DEBUG)

from api import create_app
from config import get_config

config = get_config()
app = create_app(config)

if __name__ == "__main__":
    logger.info(f"Starting {config.service_name} on {config.host}:{config.port}")
    logger.info("Default keys:")
    for view in app.state.key_store.list_keys():
        suffix = " - Lifetime" if view.is_lifetime else ""
        logger.info(f"   - {view.key} ({view.tier}{suffix})")

    uvicorn.run(app, host=config.host, port=config.port)
