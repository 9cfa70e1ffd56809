"""REST API routers."""

from pay_api.api.api_router import router as api_router

__all__ = ["api_router"]
