"""
Toast Notification Manager

A single process-wide store of toast notifications. State changes only
through dispatch(), which runs the pure reducer and then synchronously
notifies every subscriber with the full toast sequence.

Lifecycle of a toast:
    toast()   -> added with open=True (the oldest is evicted past the limit)
    dismiss() -> open=False, removal scheduled after remove_delay
    timer     -> removed from the sequence

Ids come from a counter that wraps to zero at MAX_SAFE_INTEGER. An id
can therefore repeat after 2**53 - 1 toasts; that collision is accepted.
"""

import threading
from typing import Any, Callable, Optional

from reimbursements.config import get_settings
from reimbursements.models.toast import (
    AddToast,
    DismissToast,
    RemoveToast,
    Toast,
    ToastAction,
    ToastState,
    ToastUpdate,
    ToastVariant,
    UpdateToast,
)
from reimbursements.notifications.reducer import reducer
from reimbursements.notifications.scheduler import (
    ScheduledCall,
    Scheduler,
    ThreadingScheduler,
)


MAX_SAFE_INTEGER = 2**53 - 1

ToastListener = Callable[[tuple[Toast, ...]], None]


class ToastHandle:
    """Controls one toast after it has been created."""

    def __init__(self, manager: "ToastManager", toast_id: str):
        self._manager = manager
        self._id = toast_id

    @property
    def id(self) -> str:
        return self._id

    def update(self, **fields: Any) -> None:
        """Merge new title/description/open/variant values into the toast."""
        self._manager.update(self._id, **fields)

    def dismiss(self) -> None:
        self._manager.dismiss(self._id)

    def __repr__(self) -> str:
        return f"ToastHandle(id={self._id!r})"


class ToastManager:
    """
    Reducer-driven toast store.

    Construct one per process (see get_toast_manager()); tests build their
    own with an initial state and a ManualScheduler.
    """

    def __init__(
        self,
        initial_state: Optional[ToastState] = None,
        limit: Optional[int] = None,
        remove_delay: Optional[float] = None,
        scheduler: Optional[Scheduler] = None,
        id_counter: int = 0,
    ):
        """
        Initialize the manager.

        Args:
            initial_state: Starting toasts. Defaults to none.
            limit: Maximum toasts kept. Defaults to NotificationSettings.limit.
            remove_delay: Seconds between dismissal and removal.
                          Defaults to NotificationSettings.remove_delay_ms.
            scheduler: Runs deferred removals. Defaults to a ThreadingScheduler.
            id_counter: Last id issued; the next toast gets id_counter + 1.
        """
        if limit is None or remove_delay is None:
            settings = get_settings().notifications
            limit = settings.limit if limit is None else limit
            remove_delay = settings.remove_delay_seconds if remove_delay is None else remove_delay
        if limit < 1:
            raise ValueError(f"limit must be >= 1, got {limit}")

        self._state = initial_state or ToastState()
        self._limit = limit
        self._remove_delay = remove_delay
        self._scheduler = scheduler or ThreadingScheduler()
        self._count = id_counter
        self._listeners: list[ToastListener] = []
        self._timeouts: dict[str, ScheduledCall] = {}
        # Timer threads dispatch removals; serialize them with callers
        self._lock = threading.RLock()

    @property
    def state(self) -> ToastState:
        return self._state

    @property
    def toasts(self) -> tuple[Toast, ...]:
        return self._state.toasts

    @property
    def limit(self) -> int:
        return self._limit

    @limit.setter
    def limit(self, value: int) -> None:
        if value < 1:
            raise ValueError(f"limit must be >= 1, got {value}")
        self._limit = value

    @property
    def pending_removals(self) -> int:
        return len(self._timeouts)

    def _generate_id(self) -> str:
        self._count = (self._count + 1) % MAX_SAFE_INTEGER
        return str(self._count)

    def _schedule_removal(self, toast_id: str) -> None:
        if toast_id in self._timeouts:
            return
        self._timeouts[toast_id] = self._scheduler.call_later(
            self._remove_delay,
            lambda: self._remove_expired(toast_id),
        )

    def _remove_expired(self, toast_id: str) -> None:
        with self._lock:
            self._timeouts.pop(toast_id, None)
            self.dispatch(RemoveToast(toast_id=toast_id))

    def dispatch(self, action: ToastAction) -> None:
        """Apply an action and notify every subscriber."""
        with self._lock:
            if isinstance(action, DismissToast):
                if action.toast_id is not None:
                    self._schedule_removal(action.toast_id)
                else:
                    for t in self._state.toasts:
                        self._schedule_removal(t.id)

            self._state = reducer(self._state, action, self._limit)

            toasts = self._state.toasts
            for listener in list(self._listeners):
                listener(toasts)

    def toast(
        self,
        title: Optional[Any] = None,
        description: Optional[Any] = None,
        variant: ToastVariant = ToastVariant.DEFAULT,
    ) -> ToastHandle:
        """
        Show a new toast.

        Returns:
            A handle to update or dismiss it
        """
        with self._lock:
            toast_id = self._generate_id()
            self.dispatch(AddToast(toast=Toast(
                id=toast_id,
                title=title,
                description=description,
                open=True,
                variant=variant,
            )))
        return ToastHandle(self, toast_id)

    def update(self, toast_id: str, **fields: Any) -> None:
        """Merge fields into an existing toast. Unknown ids are ignored."""
        self.dispatch(UpdateToast(toast_id=toast_id, update=ToastUpdate(**fields)))

    def dismiss(self, toast_id: Optional[str] = None) -> None:
        """Close one toast, or every toast when toast_id is None."""
        self.dispatch(DismissToast(toast_id=toast_id))

    def subscribe(self, listener: ToastListener) -> Callable[[], None]:
        """
        Register a listener called with the toast sequence after every change.

        Returns:
            A callable that unsubscribes the listener
        """
        with self._lock:
            self._listeners.append(listener)
        return lambda: self.unsubscribe(listener)

    def unsubscribe(self, listener: ToastListener) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def close(self) -> None:
        """Cancel every pending removal."""
        with self._lock:
            for call in self._timeouts.values():
                call.cancel()
            self._timeouts.clear()


# =============================================================================
# PROCESS-WIDE INSTANCE
# =============================================================================

_manager: Optional[ToastManager] = None
_manager_lock = threading.Lock()


def get_toast_manager() -> ToastManager:
    """The process-wide manager, built from NotificationSettings on first use."""
    global _manager
    with _manager_lock:
        if _manager is None:
            _manager = ToastManager()
        return _manager


def reset_toast_manager(manager: Optional[ToastManager] = None) -> None:
    """
    Replace the process-wide manager.

    The previous manager's pending removals are cancelled. With no
    argument, a fresh manager is built on the next get_toast_manager().
    """
    global _manager
    with _manager_lock:
        previous = _manager
        _manager = manager
    # close() takes the manager lock; never nest it inside _manager_lock
    if previous is not None and previous is not manager:
        previous.close()


def toast(
    title: Optional[Any] = None,
    description: Optional[Any] = None,
    variant: ToastVariant = ToastVariant.DEFAULT,
) -> ToastHandle:
    """Show a toast through the process-wide manager."""
    return get_toast_manager().toast(title=title, description=description, variant=variant)


def dismiss(toast_id: Optional[str] = None) -> None:
    """Dismiss through the process-wide manager."""
    get_toast_manager().dismiss(toast_id)


def subscribe(listener: ToastListener) -> Callable[[], None]:
    """Subscribe to the process-wide manager."""
    return get_toast_manager().subscribe(listener)
