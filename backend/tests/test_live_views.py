"""
Tests for push-driven views: change notification, batching and
recomputation of combined and switched views.
"""

import pytest
from sqlalchemy import func
from sqlalchemy.exc import OperationalError

from constants import TableNames
from domain.value_objects import LineItem, Pricing
from models import Order
from services.live_views import ChangeNotifier, CombinedView, LiveView, ObservableValue, SwitchView
from services.order_service import OrderService


def _take_order(session_factory, clock, name="Ana"):
    with session_factory() as db:
        return OrderService.from_session(db, clock).create_order(
            name, [LineItem("Capresse", 1)], Pricing(100.0, 250.0)
        )


def _save_settings(session_factory, cost, sale):
    with session_factory() as db:
        return OrderService.from_session(db).save_settings(cost, sale)


def _order_count(db):
    return db.query(func.count(Order.id)).scalar()


def test_observable_value_notifies_only_on_change():
    seen = []
    value = ObservableValue(1)
    unsubscribe = value.subscribe(seen.append)

    value.set(1)
    value.set(2)
    unsubscribe()
    value.set(3)

    assert seen == [2]
    assert value.value == 3
    assert value.subscriber_count == 0


def test_notifier_publishes_committed_tables(session_factory, clock):
    notifier = ChangeNotifier(session_factory)
    published = []
    notifier.subscribe(published.append)

    _take_order(session_factory, clock)

    assert published == [{TableNames.ORDERS}]


def test_notifier_ignores_rolled_back_work(session_factory):
    notifier = ChangeNotifier(session_factory)
    published = []
    notifier.subscribe(published.append)

    with session_factory() as db:
        db.add(Order(client_name="Ana", detail="A::1", total_dozens=1, week_id="20250103_20250109"))
        db.flush()
        db.rollback()

    assert published == []


def test_batch_coalesces_commits(session_factory, clock):
    notifier = ChangeNotifier(session_factory)
    published = []
    notifier.subscribe(published.append)

    with notifier.batch():
        _take_order(session_factory, clock)
        _take_order(session_factory, clock)
        _save_settings(session_factory, 1.0, 2.0)
        assert published == []

    assert published == [{TableNames.ORDERS, TableNames.SETTINGS}]


def test_failed_refresh_keeps_last_value_and_retries_on_read(session_factory, clock):
    notifier = ChangeNotifier(session_factory)
    fail = {"next": False}

    def count(db):
        if fail["next"]:
            fail["next"] = False
            raise OperationalError("SELECT", {}, Exception("database is locked"))
        return _order_count(db)

    view = LiveView(count, [TableNames.ORDERS], session_factory, notifier)
    seen = []
    assert view.value == 0
    view.subscribe(seen.append)

    fail["next"] = True
    _take_order(session_factory, clock)

    assert seen == []
    assert view.value == 1
    assert seen == [1]


def test_deferred_callbacks_run_when_a_listener_fails(session_factory, clock):
    notifier = ChangeNotifier(session_factory)
    ran = []

    def failing_listener(tables):
        notifier.defer(lambda: ran.append(tables))
        raise RuntimeError("listener failed")

    notifier.subscribe(failing_listener)

    with pytest.raises(RuntimeError):
        with notifier.batch():
            _take_order(session_factory, clock)

    assert ran == [{TableNames.ORDERS}]
    assert not notifier.is_dispatching


def test_cold_view_goes_stale_and_reloads_on_read(session_factory, clock):
    notifier = ChangeNotifier(session_factory)
    calls = []

    def count(db):
        calls.append(1)
        return _order_count(db)

    view = LiveView(count, [TableNames.ORDERS], session_factory, notifier)
    assert view.value == 0
    _take_order(session_factory, clock)
    _take_order(session_factory, clock)

    assert len(calls) == 1
    assert view.value == 2
    assert len(calls) == 2


def test_hot_view_pushes_new_values(session_factory, clock):
    notifier = ChangeNotifier(session_factory)
    view = LiveView(_order_count, [TableNames.ORDERS], session_factory, notifier)
    seen = []
    view.subscribe(seen.append)
    assert view.value == 0

    _take_order(session_factory, clock)
    _save_settings(session_factory, 1.0, 2.0)
    _take_order(session_factory, clock)

    assert seen == [1, 2]


def test_view_ignores_unrelated_tables(session_factory):
    notifier = ChangeNotifier(session_factory)
    calls = []

    def count(db):
        calls.append(1)
        return _order_count(db)

    view = LiveView(count, [TableNames.ORDERS], session_factory, notifier)
    view.subscribe(lambda _value: None)
    assert view.value == 0

    _save_settings(session_factory, 1.0, 2.0)

    assert len(calls) == 1


def test_closed_view_stops_following(session_factory, clock):
    notifier = ChangeNotifier(session_factory)
    view = LiveView(_order_count, [TableNames.ORDERS], session_factory, notifier)
    seen = []
    view.subscribe(seen.append)
    view.close()

    _take_order(session_factory, clock)

    assert seen == []


def test_combined_view_recomputes_once_per_burst(session_factory, clock):
    notifier = ChangeNotifier(session_factory)
    first = LiveView(_order_count, [TableNames.ORDERS], session_factory, notifier)
    second = LiveView(lambda db: _order_count(db) * 10, [TableNames.ORDERS], session_factory, notifier)
    combined = CombinedView([first, second], lambda a, b: (a, b), notifier)
    assert combined.value == (0, 0)
    seen = []
    combined.subscribe(seen.append)

    _take_order(session_factory, clock)
    with notifier.batch():
        _take_order(session_factory, clock)
        _take_order(session_factory, clock)

    assert seen == [(1, 10), (3, 30)]


def test_combined_view_of_plain_values():
    left = ObservableValue(1)
    right = ObservableValue(2)
    combined = CombinedView([left, right], lambda a, b: a + b)
    seen = []
    combined.subscribe(seen.append)

    left.set(5)
    right.set(2)

    assert combined.value == 7
    assert seen == [7]


def test_switch_view_follows_selected_source():
    sources = {"a": ObservableValue("A1"), "b": ObservableValue("B1")}
    selector = ObservableValue("a")
    switched = SwitchView(selector, sources.__getitem__)
    seen = []
    switched.subscribe(seen.append)
    assert switched.value == "A1"

    selector.set("b")
    sources["a"].set("A2")
    sources["b"].set("B2")

    assert seen == ["B1", "B2"]
    assert switched.value == "B2"
