"""Service layer - business logic orchestration."""

from cartera.services.ledger_service import LedgerService, FilterParams
from cartera.services.portfolio_service import PortfolioService
from cartera.services.analysis_service import AnalysisService

__all__ = [
    "LedgerService",
    "FilterParams",
    "PortfolioService",
    "AnalysisService",
]
