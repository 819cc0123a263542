"""
Client API endpoints
"""
from fastapi import APIRouter, Depends
from typing import List

from constants import HTTPStatus
from dependencies import get_order_service
from dtos.request.order_request import ClientRequest
from dtos.response.order_response import ClientResponse, CommandResponse
from services.order_service import OrderService
from utils.error_handlers import handle_api_errors, raise_for_result

router = APIRouter()


@router.get("/clients", response_model=List[ClientResponse])
@handle_api_errors("Client listing")
def list_clients(service: OrderService = Depends(get_order_service)):
    """All clients, ordered by name (case-insensitive)"""
    return [ClientResponse.from_record(client) for client in service.list_clients()]


@router.post("/clients", response_model=CommandResponse, status_code=HTTPStatus.CREATED)
@handle_api_errors("Client creation")
def create_client(body: ClientRequest, service: OrderService = Depends(get_order_service)):
    """Add a client. Names do not have to be unique."""
    result = service.create_client(
        body.name, body.street, body.street_number, body.cross_streets, body.phone
    )
    return CommandResponse.from_result(raise_for_result(result, "create_client"))


@router.put("/clients/{client_id}", response_model=CommandResponse)
@handle_api_errors("Client update")
def update_client(client_id: int, body: ClientRequest, service: OrderService = Depends(get_order_service)):
    """Overwrite a client. Orders already taken keep the name they were written with."""
    result = service.update_client(
        client_id, body.name, body.street, body.street_number, body.cross_streets, body.phone
    )
    return CommandResponse.from_result(raise_for_result(result, "update_client"))
