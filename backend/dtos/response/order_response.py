"""
Order, Client, Settings and Report Response DTOs
"""

from pydantic import BaseModel, Field
from datetime import datetime
from typing import List, Optional

from domain.entities import ClientRecord, OrderRecord
from domain.value_objects import ClientTotal, FlavorTotal, Pricing, WeekSummary
from dtos.internal import CommandResult


class LineItemResponse(BaseModel):
    flavor: str
    dozens: int


class OrderResponse(BaseModel):
    """An order with its decoded line items."""

    id: int = Field(description="Order ID")
    client_name: str = Field(description="Client name as written on the order")
    detail: str = Field(description="Encoded line items as stored")
    detail_display: str = Field(description="Human-readable line items")
    items: List[LineItemResponse] = Field(description="Decoded line items")
    total_dozens: int
    status: str = Field(description="PENDING, DELIVERED or CANCELLED")
    created_at: datetime
    week_id: str
    unit_cost_per_dozen: float
    unit_sale_per_dozen: float

    @classmethod
    def from_record(cls, order: OrderRecord) -> "OrderResponse":
        return cls(
            id=order.id,
            client_name=order.client_name,
            detail=order.detail,
            detail_display=order.display_detail,
            items=[LineItemResponse(flavor=item.flavor, dozens=item.dozens) for item in order.items],
            total_dozens=order.total_dozens,
            status=order.status.value,
            created_at=order.created_at,
            week_id=order.week_id,
            unit_cost_per_dozen=order.unit_cost_per_dozen,
            unit_sale_per_dozen=order.unit_sale_per_dozen
        )


class ClientResponse(BaseModel):
    id: int
    name: str
    street: str
    street_number: str
    cross_streets: str
    phone: str

    class Config:
        """Pydantic configuration."""
        from_attributes = True

    @classmethod
    def from_record(cls, client: ClientRecord) -> "ClientResponse":
        return cls.model_validate(client)


class SettingsResponse(BaseModel):
    cost_per_dozen_default: float
    sale_per_dozen_default: float

    @classmethod
    def from_pricing(cls, pricing: Pricing) -> "SettingsResponse":
        return cls(
            cost_per_dozen_default=pricing.cost_per_dozen,
            sale_per_dozen_default=pricing.sale_per_dozen
        )


class CommandResponse(BaseModel):
    """Outcome of a command that was applied (or was a no-op)."""

    outcome: str
    message: Optional[str] = None

    @classmethod
    def from_result(cls, result: CommandResult) -> "CommandResponse":
        return cls(outcome=result.outcome.value, message=result.message)


class WeekOption(BaseModel):
    week_id: str
    label: str
    is_current: bool = False


class WeekListResponse(BaseModel):
    """Selectable weeks, newest first."""

    current_week_id: str
    weeks: List[WeekOption]


class WeekSummaryResponse(BaseModel):
    week_id: str
    label: str
    total_sales: float
    total_costs: float
    profit: float
    order_count: int
    pending_count: int

    @classmethod
    def from_summary(cls, week_id: str, label: str, summary: WeekSummary) -> "WeekSummaryResponse":
        return cls(
            week_id=week_id,
            label=label,
            total_sales=summary.total_sales,
            total_costs=summary.total_costs,
            profit=summary.profit,
            order_count=summary.order_count,
            pending_count=summary.pending_count
        )


class FlavorTotalResponse(BaseModel):
    flavor: str
    total_dozens: int

    class Config:
        """Pydantic configuration."""
        from_attributes = True

    @classmethod
    def from_total(cls, total: FlavorTotal) -> "FlavorTotalResponse":
        return cls.model_validate(total)


class ClientTotalResponse(BaseModel):
    client_name: str
    total_orders: int
    total_dozens: int

    class Config:
        """Pydantic configuration."""
        from_attributes = True

    @classmethod
    def from_total(cls, total: ClientTotal) -> "ClientTotalResponse":
        return cls.model_validate(total)
