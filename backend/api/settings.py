"""
Default pricing API endpoints
"""
from fastapi import APIRouter, Depends

from dependencies import get_order_service
from dtos.request.order_request import SettingsRequest
from dtos.response.order_response import SettingsResponse
from services.order_service import OrderService
from utils.error_handlers import handle_api_errors, raise_for_result

router = APIRouter()


@router.get("/settings", response_model=SettingsResponse)
@handle_api_errors("Settings lookup")
def get_settings(service: OrderService = Depends(get_order_service)):
    """Get the default cost and sale price per dozen"""
    return SettingsResponse.from_pricing(service.get_settings())


@router.put("/settings", response_model=SettingsResponse)
@handle_api_errors("Settings update")
def update_settings(body: SettingsRequest, service: OrderService = Depends(get_order_service)):
    """Replace the default pricing. Existing orders keep the prices they were taken with."""
    raise_for_result(
        service.save_settings(body.cost_per_dozen_default, body.sale_per_dozen_default),
        "save_settings"
    )
    return SettingsResponse.from_pricing(service.get_settings())
