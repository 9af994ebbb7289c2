"""Pydantic schemas for analysis endpoints."""

import datetime as dt
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel

from cartera.domain.models.enums import GroupKey


class GroupResponse(BaseModel):
    """Response schema for one allocation group."""

    key: str
    value: Decimal
    weight: Decimal


class AllocationResponse(BaseModel):
    """Response schema for an allocation breakdown."""

    group_by: GroupKey
    rows: list[GroupResponse]
    total: Decimal


class AllocationsResponse(BaseModel):
    """Response schema for every allocation breakdown."""

    allocations: list[AllocationResponse]


class CorrelationCellResponse(BaseModel):
    """Response schema for one ticker pair; r is null when not computable."""

    a: str
    b: str
    r: Optional[float] = None


class CorrelationResponse(BaseModel):
    """Response schema for the correlation matrix."""

    available: bool
    tickers: list[str]
    cells: list[CorrelationCellResponse]


class IndexPointResponse(BaseModel):
    """Response schema for one index observation."""

    date: dt.date
    value: Decimal


class IndexSeriesResponse(BaseModel):
    """Response schema for an index series."""

    name: str
    source: str
    updated_at: Optional[dt.date] = None
    start: Optional[dt.date] = None
    end: Optional[dt.date] = None
    series: list[IndexPointResponse]
