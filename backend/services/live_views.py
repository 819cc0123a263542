"""
Live Views

Push-driven read models over the database.

- ChangeNotifier listens to SQLAlchemy session events and publishes the set
  of tables each committed transaction touched. Inside ``batch()`` the
  publications are coalesced and sent once when the batch exits.
- LiveView caches the result of a query and recomputes it when one of the
  tables it reads from changes. Views without subscribers only go stale and
  recompute on the next read.
- CombinedView holds the latest values of several views combined into one.
  While the notifier is dispatching, recomputation is deferred to the end of
  the dispatch, so a burst of changes recomputes it once.
- SwitchView follows whichever view a selector value points at.

Everything runs synchronously on the caller's thread.
"""

from contextlib import contextmanager
from itertools import chain
from typing import Callable, Generic, Iterable, List, Optional, Sequence, Set, TypeVar

from sqlalchemy import event
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
import logging

logger = logging.getLogger(__name__)

T = TypeVar('T')
K = TypeVar('K')

_CHANGED_TABLES_KEY = 'changed_tables'

Listener = Callable[[T], None]


class ObservableValue(Generic[T]):
    """A value that notifies subscribers whenever it changes."""

    def __init__(self, initial: Optional[T] = None, has_value: bool = True):
        self._value = initial
        self._has_value = has_value
        self._subscribers: List[Listener] = []

    @property
    def value(self) -> T:
        return self._value

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def set(self, value: T) -> None:
        """Store a new value; subscribers are called only if it differs."""
        if self._has_value and value == self._value:
            return
        self._value = value
        self._has_value = True
        for subscriber in list(self._subscribers):
            subscriber(value)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a change listener.

        Returns:
            Callable that removes the listener again
        """
        self._subscribers.append(listener)

        def unsubscribe():
            if listener in self._subscribers:
                self._subscribers.remove(listener)

        return unsubscribe


class ChangeNotifier:
    """
    Publishes the tables changed by committed transactions of a sessionmaker.

    Usage:
        notifier = ChangeNotifier(SessionLocal)
        with notifier.batch():
            ...  # several commits, one notification
    """

    def __init__(self, session_factory: sessionmaker):
        self._listeners: List[Callable[[Set[str]], None]] = []
        self._pending: Set[str] = set()
        self._deferred: List[Callable[[], None]] = []
        self._batch_depth = 0
        self._dispatching = False

        event.listen(session_factory, 'after_flush', self._after_flush)
        event.listen(session_factory, 'after_commit', self._after_commit)
        event.listen(session_factory, 'after_rollback', self._after_rollback)

    @property
    def is_dispatching(self) -> bool:
        return self._dispatching

    def subscribe(self, listener: Callable[[Set[str]], None]) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _after_flush(self, session: Session, flush_context) -> None:
        changed = session.info.setdefault(_CHANGED_TABLES_KEY, set())
        for obj in chain(session.new, session.dirty, session.deleted):
            table = getattr(obj, '__tablename__', None)
            if table:
                changed.add(table)

    def _after_commit(self, session: Session) -> None:
        changed = session.info.pop(_CHANGED_TABLES_KEY, None)
        if not changed:
            return
        self._pending |= changed
        if self._batch_depth == 0:
            self.flush()

    def _after_rollback(self, session: Session) -> None:
        session.info.pop(_CHANGED_TABLES_KEY, None)

    @contextmanager
    def batch(self):
        """Hold notifications until the outermost batch exits."""
        self._batch_depth += 1
        try:
            yield self
        finally:
            self._batch_depth -= 1
            if self._batch_depth == 0:
                self.flush()

    def defer(self, callback: Callable[[], None]) -> None:
        """Run ``callback`` once at the end of the current dispatch."""
        if callback not in self._deferred:
            self._deferred.append(callback)

    def flush(self) -> None:
        """Publish every pending table change, then run deferred callbacks."""
        if self._dispatching or not self._pending:
            return

        tables, self._pending = self._pending, set()
        logger.debug(f"Publishing changes to {sorted(tables)}")
        self._dispatching = True
        try:
            try:
                for listener in list(self._listeners):
                    listener(tables)
            finally:
                while self._deferred:
                    self._deferred.pop(0)()
        finally:
            self._dispatching = False
            self._deferred.clear()


class LiveView(ObservableValue[T]):
    """
    Cached query result that follows table changes.

    Args:
        compute: Runs the query in a fresh session and returns the value
        tables: Tables the query reads
        session_factory: Opens the sessions the query runs in
        notifier: Source of change notifications
    """

    def __init__(
        self,
        compute: Callable[[Session], T],
        tables: Iterable[str],
        session_factory: sessionmaker,
        notifier: ChangeNotifier,
        name: str = ''
    ):
        super().__init__(has_value=False)
        self.name = name or getattr(compute, '__name__', 'view')
        self._compute = compute
        self._tables = frozenset(tables)
        self._session_factory = session_factory
        self._stale = True
        self._unsubscribe = notifier.subscribe(self._on_tables_changed)

    @property
    def value(self) -> T:
        if self._stale:
            self.refresh()
        return self._value

    def refresh(self) -> None:
        """Recompute now and notify subscribers if the result changed."""
        with self._session_factory() as db:
            result = self._compute(db)
        self._stale = False
        if not self._has_value:
            # First load: nobody has seen a previous value to compare with
            self._value = result
            self._has_value = True
            return
        self.set(result)

    def _on_tables_changed(self, tables: Set[str]) -> None:
        if not self._tables & tables:
            return
        if not self.subscriber_count:
            self._stale = True
            return
        try:
            self.refresh()
        except SQLAlchemyError:
            # Retried on the next read
            logger.error(f"Failed to refresh view {self.name}", exc_info=True)
            self._stale = True

    def close(self) -> None:
        """Stop following change notifications."""
        self._unsubscribe()


class CombinedView(ObservableValue[T]):
    """
    Latest values of several sources combined by a function.

    Recomputed whenever any source changes; during a notifier dispatch the
    recomputation is deferred so it happens once per burst.
    """

    def __init__(
        self,
        sources: Sequence[ObservableValue],
        combine: Callable[..., T],
        scheduler: Optional[ChangeNotifier] = None
    ):
        super().__init__(has_value=False)
        self._sources = list(sources)
        self._combine = combine
        self._scheduler = scheduler
        self._computed = False
        for source in self._sources:
            source.subscribe(self._on_source_changed)

    @property
    def value(self) -> T:
        if not self._computed:
            self._recompute()
        return self._value

    def _recompute(self) -> None:
        self._computed = True
        self.set(self._combine(*(source.value for source in self._sources)))

    def _refresh(self) -> None:
        try:
            self._recompute()
        except SQLAlchemyError:
            logger.error("Failed to recompute combined view", exc_info=True)
            self._computed = False

    def _on_source_changed(self, _value) -> None:
        if self._scheduler is not None and self._scheduler.is_dispatching:
            self._scheduler.defer(self._refresh)
        else:
            self._refresh()


class SwitchView(ObservableValue[T]):
    """
    Mirrors the view chosen by the current selector value.

    When the selector changes, the previous view is dropped and the view
    built by ``factory`` for the new key is followed instead.
    """

    def __init__(self, selector: ObservableValue[K], factory: Callable[[K], ObservableValue[T]]):
        super().__init__(has_value=False)
        self._factory = factory
        self._inner: Optional[ObservableValue[T]] = None
        self._unsubscribe_inner: Callable[[], None] = lambda: None
        self._follow(selector.value, notify=False)
        selector.subscribe(self._on_selector_changed)

    @property
    def value(self) -> T:
        if not self._has_value:
            self._value = self._inner.value
            self._has_value = True
        return self._value

    def _follow(self, key: K, notify: bool) -> None:
        self._unsubscribe_inner()
        self._inner = self._factory(key)
        self._unsubscribe_inner = self._inner.subscribe(self.set)
        if notify:
            self.set(self._inner.value)
        else:
            self._has_value = False

    def _on_selector_changed(self, key: K) -> None:
        self._follow(key, notify=True)
