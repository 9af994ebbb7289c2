"""API routers package."""

from cartera.api.routers.portfolio import router as portfolio_router
from cartera.api.routers.transactions import router as transactions_router
from cartera.api.routers.analysis import router as analysis_router

__all__ = [
    "portfolio_router",
    "transactions_router",
    "analysis_router",
]
