"""Dependency injection for FastAPI."""

from fastapi import Depends

from cartera.config.settings import Settings, get_settings
from cartera.repositories.filesystem import JsonSnapshotRepository
from cartera.repositories.protocols import SnapshotRepository
from cartera.services import AnalysisService, LedgerService, PortfolioService


def get_app_settings() -> Settings:
    """Provide the current Settings instance."""
    return get_settings()


def get_snapshot_repo(settings: Settings = Depends(get_app_settings)) -> SnapshotRepository:
    """Provide SnapshotRepository instance."""
    return JsonSnapshotRepository(settings.get_data_dir())


def get_portfolio_service(
    snapshot_repo: SnapshotRepository = Depends(get_snapshot_repo),
    settings: Settings = Depends(get_app_settings),
) -> PortfolioService:
    """Provide PortfolioService instance."""
    return PortfolioService(
        snapshot_repo=snapshot_repo,
        ticker_page_size=settings.ticker_page_size,
    )


def get_ledger_service(
    snapshot_repo: SnapshotRepository = Depends(get_snapshot_repo),
    settings: Settings = Depends(get_app_settings),
) -> LedgerService:
    """Provide LedgerService instance."""
    return LedgerService(
        snapshot_repo=snapshot_repo,
        page_size=settings.movements_page_size,
        max_compare_periods=settings.max_compare_periods,
        history_start=settings.history_start,
    )


def get_analysis_service(
    snapshot_repo: SnapshotRepository = Depends(get_snapshot_repo),
) -> AnalysisService:
    """Provide AnalysisService instance."""
    return AnalysisService(snapshot_repo=snapshot_repo)
