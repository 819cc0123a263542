"""
Order API endpoints

Edits and status changes on an id that does not exist succeed as no-ops.
"""
from fastapi import APIRouter, Depends, HTTPException, Query
from typing import List, Optional

from constants import HTTPStatus
from dependencies import get_order_service
from domain.value_objects import OrderStatus
from dtos.request.order_request import OrderRequest
from dtos.response.order_response import CommandResponse, OrderResponse
from services.order_service import OrderService
from utils.error_handlers import handle_api_errors, raise_for_result

router = APIRouter()


@router.get("/orders", response_model=List[OrderResponse])
@handle_api_errors("Order listing")
def list_orders(
    week_id: Optional[str] = Query(None, description="Business week id; defaults to the current week"),
    status: OrderStatus = Query(OrderStatus.PENDING, description="Order status"),
    service: OrderService = Depends(get_order_service)
):
    """Orders of one week in one status, newest first."""
    week = week_id or service.current_week().week_id
    return [
        OrderResponse.from_record(order)
        for order in service.orders_by_week_and_status(week, status)
    ]


@router.post("/orders", response_model=CommandResponse, status_code=HTTPStatus.CREATED)
@handle_api_errors("Order creation")
def create_order(body: OrderRequest, service: OrderService = Depends(get_order_service)):
    """Take a new order, priced with the current default settings."""
    result = service.create_order(body.client_name, body.to_line_items())
    return CommandResponse.from_result(raise_for_result(result, "create_order"))


@router.get("/orders/{order_id}", response_model=OrderResponse)
@handle_api_errors("Order lookup")
def get_order(order_id: int, service: OrderService = Depends(get_order_service)):
    order = service.get_order(order_id)
    if order is None:
        raise HTTPException(status_code=HTTPStatus.NOT_FOUND, detail=f"Order {order_id} not found")
    return OrderResponse.from_record(order)


@router.put("/orders/{order_id}", response_model=CommandResponse)
@handle_api_errors("Order update")
def update_order(order_id: int, body: OrderRequest, service: OrderService = Depends(get_order_service)):
    """Rewrite client name and line items; status, week and prices are kept."""
    result = service.update_order(order_id, body.client_name, body.to_line_items())
    return CommandResponse.from_result(raise_for_result(result, "update_order"))


@router.post("/orders/{order_id}/deliver", response_model=CommandResponse)
@handle_api_errors("Order delivery")
def mark_delivered(order_id: int, service: OrderService = Depends(get_order_service)):
    return CommandResponse.from_result(raise_for_result(service.mark_delivered(order_id), "mark_delivered"))


@router.post("/orders/{order_id}/cancel", response_model=CommandResponse)
@handle_api_errors("Order cancellation")
def cancel_order(order_id: int, service: OrderService = Depends(get_order_service)):
    return CommandResponse.from_result(raise_for_result(service.cancel_order(order_id), "cancel_order"))
