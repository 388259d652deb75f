import logging

import uvicorn

from .app import create_app
from .core.config import Settings


settings = Settings()

# Configure logging
logging.basicConfig(
    level=logging.INFO if settings.is_development else logging.WARNING,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(),
    ]
)
logger = logging.getLogger(__name__)

if __name__ == "__main__":
    uvicorn.run(create_app(settings=settings), host="0.0.0.0", port=8080)
