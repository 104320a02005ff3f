import time
import logging
from fastapi import APIRouter, Depends

from lsms.config.settings import settings
from lsms.storage import JsonStore, get_store

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api",
    tags=["health"]
)

@router.get("/health")
def health_check(store: JsonStore = Depends(get_store)):
    """Health check endpoint to verify the API is running"""
    response = {
        'status': 'healthy',
        'environment': settings.APP_ENV,
        'data_dir': store.base_dir,
        'timestamp': time.time()
    }
    logger.info(f"Health check response: {response}")
    return response
