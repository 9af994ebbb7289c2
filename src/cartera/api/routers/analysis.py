"""Portfolio analysis endpoints."""

from fastapi import APIRouter, Depends

from cartera.api.deps import get_analysis_service
from cartera.api.schemas import (
    AllocationResponse,
    AllocationsResponse,
    CorrelationCellResponse,
    CorrelationResponse,
    GroupResponse,
    IndexPointResponse,
    IndexSeriesResponse,
)
from cartera.domain.models import GroupKey
from cartera.domain.views import AllocationView
from cartera.services import AnalysisService

router = APIRouter(prefix="/analysis", tags=["analysis"])


def _allocation_to_response(view: AllocationView) -> AllocationResponse:
    return AllocationResponse(
        group_by=view.group_by,
        rows=[GroupResponse(key=r.key, value=r.value, weight=r.weight) for r in view.rows],
        total=view.total,
    )


@router.get("/allocation", response_model=AllocationsResponse)
def get_allocations(
    analysis: AnalysisService = Depends(get_analysis_service),
) -> AllocationsResponse:
    """Allocation by sector, country and currency."""
    return AllocationsResponse(
        allocations=[_allocation_to_response(v) for v in analysis.allocations()],
    )


@router.get("/allocation/{key}", response_model=AllocationResponse)
def get_allocation(
    key: GroupKey,
    analysis: AnalysisService = Depends(get_analysis_service),
) -> AllocationResponse:
    """Allocation by a single dimension."""
    return _allocation_to_response(analysis.allocation(key))


@router.get("/correlations", response_model=CorrelationResponse)
def get_correlations(
    analysis: AnalysisService = Depends(get_analysis_service),
) -> CorrelationResponse:
    """Pearson correlation of daily returns between holdings."""
    view = analysis.correlations()
    tickers = list(dict.fromkeys(c.a for c in view.cells))
    return CorrelationResponse(
        available=view.available,
        tickers=tickers,
        cells=[CorrelationCellResponse(a=c.a, b=c.b, r=c.r) for c in view.cells],
    )


@router.get("/index/{name}", response_model=IndexSeriesResponse)
def get_index_series(
    name: str,
    analysis: AnalysisService = Depends(get_analysis_service),
) -> IndexSeriesResponse:
    """Externally downloaded index series, e.g. the CCL exchange rate."""
    series = analysis.index_series(name)
    return IndexSeriesResponse(
        name=name,
        source=series.source,
        updated_at=series.updated_at,
        start=series.start,
        end=series.end,
        series=[IndexPointResponse(date=p.date, value=p.value) for p in series.series],
    )
