"""
API endpoints package.

Contains FastAPI routers for all service endpoints:
- /healthz - Liveness check
"""
from .healthz import router as healthz_router

__all__ = ["healthz_router"]
