from sqlalchemy import Column, String, Integer, Float, Text, DateTime, CheckConstraint, Index
from datetime import datetime

from constants import SettingsDefaults, TableNames
from database import Base
from domain.entities import ClientRecord, OrderRecord
from domain.value_objects import OrderStatus, Pricing


class Settings(Base):
    """
    Default pricing, a single row with a fixed id.

    Saved wholesale; orders copy these values when they are created.
    """
    __tablename__ = TableNames.SETTINGS

    id = Column(Integer, primary_key=True, default=SettingsDefaults.ROW_ID)
    cost_per_dozen_default = Column(Float, nullable=False, default=SettingsDefaults.COST_PER_DOZEN)
    sale_per_dozen_default = Column(Float, nullable=False, default=SettingsDefaults.SALE_PER_DOZEN)

    __table_args__ = (
        CheckConstraint(f"id = {SettingsDefaults.ROW_ID}", name='ck_settings_singleton'),
    )

    def to_pricing(self) -> Pricing:
        return Pricing(
            cost_per_dozen=self.cost_per_dozen_default,
            sale_per_dozen=self.sale_per_dozen_default
        )


class Client(Base):
    __tablename__ = TableNames.CLIENTS

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False)
    street = Column(String, nullable=False, default='')
    street_number = Column(String, nullable=False, default='')
    cross_streets = Column(String, nullable=False, default='')
    phone = Column(String, nullable=False, default='')

    __table_args__ = (
        CheckConstraint("name != ''"),
    )

    def to_record(self) -> ClientRecord:
        return ClientRecord(
            id=self.id,
            name=self.name,
            street=self.street or '',
            street_number=self.street_number or '',
            cross_streets=self.cross_streets or '',
            phone=self.phone or ''
        )


class Order(Base):
    """
    One customer order.

    Order States:
    - PENDING: Taken, not yet handed over (initial state)
    - DELIVERED: Handed over (terminal)
    - CANCELLED: Dropped; excluded from weekly totals (terminal)

    client_name is a copy, not a foreign key. week_id and the unit prices are
    fixed when the order is created.
    """
    __tablename__ = TableNames.ORDERS

    id = Column(Integer, primary_key=True, autoincrement=True)
    client_name = Column(String, nullable=False)
    detail = Column(Text, nullable=False, default='')  # encoded line items, see domain.line_item_codec
    total_dozens = Column(Integer, nullable=False, default=0)
    status = Column(String, nullable=False, default=OrderStatus.PENDING.value)
    created_at = Column(DateTime, nullable=False, default=datetime.now)
    week_id = Column(String, nullable=False)  # YYYYMMDD_YYYYMMDD
    unit_cost_per_dozen = Column(Float, nullable=False, default=0.0)
    unit_sale_per_dozen = Column(Float, nullable=False, default=0.0)

    __table_args__ = (
        CheckConstraint(
            "status IN ('PENDING', 'DELIVERED', 'CANCELLED')",
            name='ck_orders_status'
        ),
        Index('idx_orders_week_status', 'week_id', 'status'),
        Index('idx_orders_created_at', 'created_at'),
    )

    @property
    def order_status(self) -> OrderStatus:
        return OrderStatus.from_string(self.status)

    def to_record(self) -> OrderRecord:
        return OrderRecord(
            id=self.id,
            client_name=self.client_name,
            detail=self.detail or '',
            total_dozens=self.total_dozens,
            status=self.order_status,
            created_at=self.created_at,
            week_id=self.week_id,
            unit_cost_per_dozen=self.unit_cost_per_dozen,
            unit_sale_per_dozen=self.unit_sale_per_dozen
        )
