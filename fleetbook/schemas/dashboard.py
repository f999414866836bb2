"""
Dashboard schemas.
"""
from pydantic import BaseModel
from typing import List


class DateRangeResponse(BaseModel):
    start: str
    end: str
    label: str


class DashboardSummaryResponse(BaseModel):
    total_trips: int
    total_revenue: float
    total_weight: float
    average_weight: float
    unique_trucks: int
    unique_consignors: int


class TruckRow(BaseModel):
    truck: str
    trips: int
    revenue: float


class ConsignorRow(BaseModel):
    consignor: str
    revenue: float
    trips: int


class DailyRow(BaseModel):
    date: str
    revenue: float
    trips: int


class DashboardResponse(BaseModel):
    period: str
    date_range: DateRangeResponse
    summary: DashboardSummaryResponse
    per_truck: List[TruckRow]
    per_consignor: List[ConsignorRow]
    per_day: List[DailyRow]
