"""
Business week and weekly report API endpoints
"""
from fastapi import APIRouter, Depends, Query
from typing import List, Optional

from dependencies import get_order_service
from domain.week_calendar import label_from_week_id
from dtos.response.order_response import (
    ClientTotalResponse,
    FlavorTotalResponse,
    WeekListResponse,
    WeekOption,
    WeekSummaryResponse,
)
from services.order_service import OrderService
from utils.error_handlers import handle_api_errors

router = APIRouter()


@router.get("/weeks", response_model=WeekListResponse)
@handle_api_errors("Week listing")
def list_weeks(service: OrderService = Depends(get_order_service)):
    """Weeks with orders plus the current week, newest first."""
    current = service.current_week().week_id
    return WeekListResponse(
        current_week_id=current,
        weeks=[
            WeekOption(week_id=week_id, label=label_from_week_id(week_id), is_current=week_id == current)
            for week_id in service.available_weeks()
        ]
    )


@router.get("/weeks/{week_id}/summary", response_model=WeekSummaryResponse)
@handle_api_errors("Week summary")
def week_summary(week_id: str, service: OrderService = Depends(get_order_service)):
    """Sales, costs, profit and order counts; cancelled orders are left out."""
    return WeekSummaryResponse.from_summary(
        week_id, label_from_week_id(week_id), service.week_summary(week_id)
    )


@router.get("/weeks/{week_id}/top-flavors", response_model=List[FlavorTotalResponse])
@handle_api_errors("Top flavors")
def top_flavors(
    week_id: str,
    limit: Optional[int] = Query(None, ge=1, le=1000),
    service: OrderService = Depends(get_order_service)
):
    return [FlavorTotalResponse.from_total(row) for row in service.top_flavors(week_id, limit=limit)]


@router.get("/weeks/{week_id}/top-clients", response_model=List[ClientTotalResponse])
@handle_api_errors("Top clients")
def top_clients(
    week_id: str,
    limit: Optional[int] = Query(None, ge=1, le=1000),
    service: OrderService = Depends(get_order_service)
):
    return [ClientTotalResponse.from_total(row) for row in service.top_clients(week_id, limit=limit)]
