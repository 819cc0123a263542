"""
Order, Client and Settings Request DTOs

Request bodies are deliberately permissive about business rules: blank
names or zero quantities reach the service, which rejects them with the
same messages every other caller gets.
"""

from pydantic import BaseModel, Field
from typing import List

from domain.value_objects import LineItem


class LineItemRequest(BaseModel):
    """One flavor and its quantity in dozens."""

    flavor: str = Field("", description="Flavor name")
    dozens: int = Field(0, description="Quantity in dozens")

    def to_line_item(self) -> LineItem:
        return LineItem(flavor=self.flavor, dozens=self.dozens)


class OrderRequest(BaseModel):
    """Body of order creation and order edits."""

    client_name: str = Field("", description="Client name, copied onto the order")
    items: List[LineItemRequest] = Field(default_factory=list, description="Line items")

    def to_line_items(self) -> List[LineItem]:
        return [item.to_line_item() for item in self.items]


class ClientRequest(BaseModel):
    """Client fields; everything but the name is optional."""

    name: str = Field("", description="Client name")
    street: str = Field("", description="Street")
    street_number: str = Field("", description="Street number")
    cross_streets: str = Field("", description="Cross streets")
    phone: str = Field("", description="Phone number")


class SettingsRequest(BaseModel):
    """Default pricing. Negative values are refused here, before the service."""

    cost_per_dozen_default: float = Field(ge=0, allow_inf_nan=False, description="Cost of one dozen")
    sale_per_dozen_default: float = Field(ge=0, allow_inf_nan=False, description="Sale price of one dozen")
