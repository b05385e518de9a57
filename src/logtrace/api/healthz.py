"""
Health check endpoint.

- /healthz: Liveness check (always 200 if service alive), reporting the
  active log output mode
"""

from datetime import datetime, timezone
from typing import Any, Dict

import structlog
from fastapi import APIRouter, Request

from .. import __version__

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.get(
    "/healthz",
    status_code=200,
    summary="Liveness check",
    description="""
    Liveness check endpoint.

    Always returns 200 OK if the service is running, along with the log
    output mode the service was configured with.
    """,
)
async def liveness_check(request: Request) -> Dict[str, Any]:
    """
    Liveness check - always returns 200 if service is alive.
    """
    settings = request.app.state.settings
    logger.debug("Liveness check")

    return {
        "status": "alive",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "service": "logtrace",
        "version": __version__,
        "log_mode": "pretty" if settings.logging.pretty_mode else "structured",
    }
