"""
Tests for OrderService against the SQLite repositories, plus in-memory
stores where the test has to prove that nothing was written.
"""

from dataclasses import replace
from datetime import datetime
from typing import List, Optional

import pytest
from sqlalchemy.exc import OperationalError

from constants import Messages
from domain.entities import ClientRecord, OrderRecord
from domain.value_objects import LineItem, OrderStatus, Pricing, WeekSummary
from dtos.internal import CommandOutcome
from exceptions import DatabaseError
from services.interfaces import IClientStore, IOrderStore, ISettingsStore
from services.order_service import OrderService, merge_weeks, week_labels

from conftest import FIXED_NOW, FIXED_WEEK_ID

ANA_ITEMS = [LineItem("Jamón y queso", 2), LineItem("Capresse", 1)]


class RecordingOrderStore(IOrderStore):
    """Dict-backed order store that records every write"""

    def __init__(self, fail_writes: bool = False):
        self.rows = {}
        self.writes = []
        self.fail_writes = fail_writes

    def _check(self):
        if self.fail_writes:
            raise OperationalError("INSERT INTO orders", {}, Exception("disk I/O error"))

    def find_order_by_id(self, order_id: int) -> Optional[OrderRecord]:
        return self.rows.get(order_id)

    def insert_order(self, order: OrderRecord) -> OrderRecord:
        self._check()
        stored = replace(order, id=len(self.rows) + 1)
        self.rows[stored.id] = stored
        self.writes.append(("insert", stored))
        return stored

    def update_order(self, order: OrderRecord) -> None:
        self._check()
        self.writes.append(("update", order))
        if order.id in self.rows:
            self.rows[order.id] = order

    def orders_by_week_and_status(self, week_id: str, status: OrderStatus) -> List[OrderRecord]:
        return [o for o in self.rows.values() if o.week_id == week_id and o.status is status]

    def active_orders_by_week(self, week_id: str) -> List[OrderRecord]:
        return [o for o in self.rows.values() if o.week_id == week_id and o.status.counts_towards_totals()]

    def distinct_week_ids(self) -> List[str]:
        return sorted({o.week_id for o in self.rows.values()}, reverse=True)

    def pending_count(self, week_id: str) -> int:
        return len(self.orders_by_week_and_status(week_id, OrderStatus.PENDING))

    def week_totals(self, week_id: str) -> WeekSummary:
        active = self.active_orders_by_week(week_id)
        return WeekSummary(
            total_sales=sum(o.sale_total for o in active),
            total_costs=sum(o.cost_total for o in active),
            order_count=len(active)
        )


class RecordingClientStore(IClientStore):
    def __init__(self):
        self.writes = []

    def insert_or_update_client(self, client: ClientRecord) -> ClientRecord:
        self.writes.append(client)
        return replace(client, id=client.id or len(self.writes))

    def all_by_name(self) -> List[ClientRecord]:
        return []


class RecordingSettingsStore(ISettingsStore):
    def __init__(self, pricing: Optional[Pricing] = None):
        self.pricing = pricing
        self.writes = []

    def insert_or_update_settings(self, pricing: Pricing) -> None:
        self.writes.append(pricing)
        self.pricing = pricing

    def get_settings(self) -> Optional[Pricing]:
        return self.pricing


@pytest.fixture
def fake_stores():
    return RecordingOrderStore(), RecordingClientStore(), RecordingSettingsStore(Pricing(100.0, 250.0))


@pytest.fixture
def fake_service(fake_stores, clock):
    orders, clients, settings = fake_stores
    return OrderService(orders, clients, settings, clock=clock)


# ----------------------------------------------------------------------
# End-to-end over SQLite
# ----------------------------------------------------------------------

def test_order_lifecycle_and_week_summary(service):
    """Ana's order of 3 dozens at 100/250 shows up in the week totals."""
    assert service.save_settings(100.0, 250.0).succeeded
    assert service.create_order("Ana", ANA_ITEMS).succeeded

    pending = service.pending_orders(FIXED_WEEK_ID)
    assert len(pending) == 1
    order = pending[0]
    assert order.client_name == "Ana"
    assert order.total_dozens == 3
    assert order.items == ANA_ITEMS
    assert order.status is OrderStatus.PENDING
    assert order.created_at == FIXED_NOW
    assert order.week_id == FIXED_WEEK_ID
    assert (order.unit_cost_per_dozen, order.unit_sale_per_dozen) == (100.0, 250.0)

    summary = service.week_summary(FIXED_WEEK_ID)
    assert summary == WeekSummary(total_sales=750.0, total_costs=300.0, order_count=1, pending_count=1)
    assert summary.profit == 450.0

    assert service.mark_delivered(order.id).succeeded
    assert service.pending_orders(FIXED_WEEK_ID) == []
    assert [o.id for o in service.delivered_orders(FIXED_WEEK_ID)] == [order.id]

    summary = service.week_summary(FIXED_WEEK_ID)
    assert summary.pending_count == 0
    assert summary.order_count == 1
    assert summary.total_sales == 750.0


def test_cancelled_orders_are_left_out(service):
    service.save_settings(100.0, 250.0)
    service.create_order("Ana", [LineItem("Capresse", 2)])
    service.create_order("Bea", [LineItem("Humita", 5)])
    bea = next(o for o in service.pending_orders(FIXED_WEEK_ID) if o.client_name == "Bea")

    assert service.cancel_order(bea.id).succeeded

    summary = service.week_summary(FIXED_WEEK_ID)
    assert summary.order_count == 1
    assert summary.pending_count == 1
    assert summary.total_sales == 500.0
    assert [row.flavor for row in service.top_flavors(FIXED_WEEK_ID)] == ["Capresse"]
    assert [row.client_name for row in service.top_clients(FIXED_WEEK_ID)] == ["Ana"]
    assert service.orders_by_week_and_status(FIXED_WEEK_ID, OrderStatus.CANCELLED)[0].id == bea.id


def test_pricing_snapshot_survives_settings_change(service):
    service.save_settings(100.0, 250.0)
    service.create_order("Ana", ANA_ITEMS)
    service.save_settings(120.0, 300.0)

    order = service.pending_orders(FIXED_WEEK_ID)[0]
    assert (order.unit_cost_per_dozen, order.unit_sale_per_dozen) == (100.0, 250.0)
    assert service.week_summary(FIXED_WEEK_ID).total_sales == 750.0
    assert service.get_settings() == Pricing(120.0, 300.0)


def test_explicit_settings_override_the_stored_ones(service):
    service.save_settings(100.0, 250.0)
    service.create_order("Ana", ANA_ITEMS, current_settings=Pricing(90.0, 200.0))
    order = service.pending_orders(FIXED_WEEK_ID)[0]
    assert (order.unit_cost_per_dozen, order.unit_sale_per_dozen) == (90.0, 200.0)


def test_settings_default_to_zero(service):
    assert service.get_settings() == Pricing(0.0, 0.0)
    assert service.create_order("Ana", ANA_ITEMS).succeeded
    assert service.week_summary(FIXED_WEEK_ID).total_sales == 0.0


def test_orders_listed_newest_first(service, clock):
    service.create_order("Ana", ANA_ITEMS)
    clock.advance(minutes=5)
    service.create_order("Bea", ANA_ITEMS)
    assert [o.client_name for o in service.pending_orders(FIXED_WEEK_ID)] == ["Bea", "Ana"]


def test_update_order_keeps_status_week_and_prices(service, clock):
    service.save_settings(100.0, 250.0)
    service.create_order("Ana", ANA_ITEMS)
    original = service.pending_orders(FIXED_WEEK_ID)[0]

    clock.advance(days=10)
    service.save_settings(1.0, 2.0)
    result = service.update_order(original.id, "  Ana María ", [LineItem("Humita", 4)])

    assert result.succeeded
    updated = service.get_order(original.id)
    assert updated.client_name == "Ana María"
    assert updated.detail == "Humita::4"
    assert updated.total_dozens == 4
    assert updated.status is OrderStatus.PENDING
    assert updated.week_id == original.week_id
    assert updated.created_at == original.created_at
    assert (updated.unit_cost_per_dozen, updated.unit_sale_per_dozen) == (100.0, 250.0)


def test_stored_total_matches_stored_items(service):
    items = [LineItem("Especial:", 2), LineItem("Cap::resse", 1)]
    assert service.create_order("Ana", items).succeeded

    order = service.pending_orders(FIXED_WEEK_ID)[0]
    assert order.items == [LineItem("Especial:", 2), LineItem("Capresse", 1)]
    assert order.total_dozens == sum(item.dozens for item in order.items) == 3

    assert service.update_order(order.id, "Ana", [LineItem("Humita:", 4)]).succeeded
    updated = service.get_order(order.id)
    assert updated.items == [LineItem("Humita:", 4)]
    assert updated.total_dozens == 4


def test_status_changes_are_not_guarded(service):
    service.create_order("Ana", ANA_ITEMS)
    order = service.pending_orders(FIXED_WEEK_ID)[0]

    assert service.cancel_order(order.id).succeeded
    assert service.mark_delivered(order.id).succeeded
    assert service.get_order(order.id).status is OrderStatus.DELIVERED


def test_delivered_order_can_still_be_edited(service):
    service.create_order("Ana", ANA_ITEMS)
    order = service.pending_orders(FIXED_WEEK_ID)[0]
    service.mark_delivered(order.id)

    assert service.update_order(order.id, "Ana", [LineItem("Humita", 6)]).succeeded

    updated = service.get_order(order.id)
    assert updated.status is OrderStatus.DELIVERED
    assert updated.items == [LineItem("Humita", 6)]
    assert updated.total_dozens == 6


def test_order_ids_are_unique_and_increasing(service):
    service.create_order("Ana", ANA_ITEMS)
    service.create_order("Ana", ANA_ITEMS)
    ids = sorted(o.id for o in service.pending_orders(FIXED_WEEK_ID))
    assert len(set(ids)) == 2
    assert ids[0] < ids[1]


def test_available_weeks_include_current_week(service, clock):
    assert service.available_weeks() == [FIXED_WEEK_ID]

    service.create_order("Ana", ANA_ITEMS)
    clock.now = datetime(2025, 1, 17, 9, 0)
    assert service.available_weeks() == ["20250117_20250123", FIXED_WEEK_ID]
    assert service.week_ids() == [FIXED_WEEK_ID]


def test_week_helpers():
    assert merge_weeks(["20250103_20250109", "20241227_20250102"], "20250103_20250109") == [
        "20250103_20250109", "20241227_20250102"
    ]
    assert week_labels(["20250103_20250109"]) == {"20250103_20250109": "03/01/2025 - 09/01/2025"}


def test_ranking_tie_breaks_over_sqlite(service, clock):
    service.create_order("Zoe", [LineItem("B", 2), LineItem("A", 2)])
    service.create_order("Abel", [LineItem("C", 5)])
    service.create_order("Abel", [LineItem("A", 1)])

    assert [(row.flavor, row.total_dozens) for row in service.top_flavors(FIXED_WEEK_ID)] == [
        ("C", 5), ("A", 3), ("B", 2)
    ]
    assert [(row.client_name, row.total_orders) for row in service.top_clients(FIXED_WEEK_ID, limit=1)] == [
        ("Abel", 2)
    ]


# ----------------------------------------------------------------------
# Clients
# ----------------------------------------------------------------------

def test_clients_sorted_case_insensitively(service):
    for name in ("bea", "Ana", "carla"):
        assert service.create_client(name).succeeded
    assert [c.name for c in service.list_clients()] == ["Ana", "bea", "carla"]


def test_client_update_does_not_touch_past_orders(service):
    service.create_client("Ana", street="Mitre", number="120", phone="555-1234")
    ana = service.list_clients()[0]
    assert (ana.street, ana.street_number, ana.phone) == ("Mitre", "120", "555-1234")
    service.create_order("Ana", ANA_ITEMS)

    assert service.update_client(ana.id, "Ana Gómez", cross_streets="Sarmiento y Belgrano").succeeded

    updated = service.list_clients()[0]
    assert updated.id == ana.id
    assert updated.name == "Ana Gómez"
    assert updated.cross_streets == "Sarmiento y Belgrano"
    assert updated.street == ""
    assert service.pending_orders(FIXED_WEEK_ID)[0].client_name == "Ana"


def test_client_name_required(fake_service, fake_stores):
    _, clients, _ = fake_stores
    result = fake_service.create_client("   ")
    assert result.outcome is CommandOutcome.REJECTED
    assert result.message == Messages.CLIENT_NAME_REQUIRED
    assert fake_service.update_client(1, "").outcome is CommandOutcome.REJECTED
    assert clients.writes == []


# ----------------------------------------------------------------------
# Validation and no-ops, proven with recording stores
# ----------------------------------------------------------------------

@pytest.mark.parametrize("client_name, items, message", [
    ("", ANA_ITEMS, Messages.CLIENT_NAME_REQUIRED),
    ("   ", ANA_ITEMS, Messages.CLIENT_NAME_REQUIRED),
    ("Ana", [], Messages.LINE_ITEMS_REQUIRED),
    ("Ana", [LineItem("Capresse", 0)], Messages.LINE_ITEMS_INVALID),
    ("Ana", [LineItem("Capresse", 1), LineItem(" ", 2)], Messages.LINE_ITEMS_INVALID),
    ("Ana", [LineItem("::", 2)], Messages.LINE_ITEMS_INVALID),
    ("Ana", [LineItem("Capresse", 1), LineItem(" || :: ", 2)], Messages.LINE_ITEMS_INVALID),
])
def test_invalid_orders_are_rejected_without_writes(fake_service, fake_stores, client_name, items, message):
    orders, _, _ = fake_stores
    result = fake_service.create_order(client_name, items)
    assert result.outcome is CommandOutcome.REJECTED
    assert result.message == message
    assert orders.writes == []


def test_negative_pricing_is_rejected(fake_service, fake_stores):
    orders, _, _ = fake_stores
    result = fake_service.create_order("Ana", ANA_ITEMS, current_settings=Pricing(-1.0, 250.0))
    assert result.outcome is CommandOutcome.REJECTED
    assert result.message == Messages.SETTINGS_INVALID
    assert orders.writes == []


def test_invalid_edit_is_rejected(fake_service, fake_stores):
    orders, _, _ = fake_stores
    fake_service.create_order("Ana", ANA_ITEMS)
    order_id = orders.writes[0][1].id

    result = fake_service.update_order(order_id, "Ana", [])
    assert result.outcome is CommandOutcome.REJECTED
    assert len(orders.writes) == 1


def test_commands_on_unknown_ids_are_silent_noops(fake_service, fake_stores):
    orders, _, _ = fake_stores
    assert fake_service.mark_delivered(42).outcome is CommandOutcome.OK
    assert fake_service.cancel_order(42).outcome is CommandOutcome.OK
    assert fake_service.update_order(42, "Ana", ANA_ITEMS).outcome is CommandOutcome.OK
    assert orders.writes == []


def test_order_created_from_stored_settings(fake_service, fake_stores):
    orders, _, _ = fake_stores
    fake_service.create_order("  Ana ", ANA_ITEMS)
    kind, stored = orders.writes[0]
    assert kind == "insert"
    assert stored.client_name == "Ana"
    assert stored.detail == "Jamón y queso::2||Capresse::1"
    assert stored.unit_sale_per_dozen == 250.0


def test_store_failure_raises_database_error(clock):
    service = OrderService(
        RecordingOrderStore(fail_writes=True),
        RecordingClientStore(),
        RecordingSettingsStore(Pricing(100.0, 250.0)),
        clock=clock
    )
    with pytest.raises(DatabaseError) as exc_info:
        service.create_order("Ana", ANA_ITEMS)
    assert exc_info.value.message == "disk I/O error"
    assert exc_info.value.details == {"operation": "create_order"}
