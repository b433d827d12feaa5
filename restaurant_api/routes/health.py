"""
Restaurant API - Health Check Route
====================================

What:  Health check endpoint for monitoring and load balancer probes.
How:   Pings the document store through the same connection-per-request
       scope the CRUD routes use, so a healthy answer means a request could
       actually reach the store.

    Status levels:
    - healthy:   store answered the ping
    - unhealthy: store unreachable (still HTTP 200; the body carries the state)
"""

import logging
import time

from fastapi import APIRouter, Depends
from pymongo.errors import PyMongoError

from restaurant_api import __version__
from restaurant_api.database import RestaurantStore, get_store
from restaurant_api.schemas.restaurant import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Module-level: set once at import, read for uptime reporting
_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(store: RestaurantStore = Depends(get_store)) -> HealthResponse:
    db_status = "connected"
    overall = "healthy"

    try:
        await store.ping()
    except PyMongoError as e:
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: document store unreachable: %s", str(e))

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
