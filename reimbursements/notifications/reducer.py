"""
Toast State Transitions

reducer() is a pure function from (state, action) to the next state.
It schedules nothing; the manager turns DISMISS actions into deferred
REMOVE actions.
"""

from reimbursements.models.toast import (
    AddToast,
    DismissToast,
    RemoveToast,
    ToastAction,
    ToastState,
    UpdateToast,
)


DEFAULT_TOAST_LIMIT = 1


def reducer(
    state: ToastState,
    action: ToastAction,
    limit: int = DEFAULT_TOAST_LIMIT,
) -> ToastState:
    """
    Apply one action to the toast state.

    ADD     prepends and keeps the newest `limit` toasts.
    UPDATE  merges the set fields into the toast with that id.
    DISMISS closes the toast with that id, or all toasts.
    REMOVE  drops the toast with that id, or all toasts.
    """
    if isinstance(action, AddToast):
        return ToastState(toasts=((action.toast,) + state.toasts)[:limit])

    if isinstance(action, UpdateToast):
        changes = action.update.changes()
        return ToastState(toasts=tuple(
            t.model_copy(update=changes) if t.id == action.toast_id else t
            for t in state.toasts
        ))

    if isinstance(action, DismissToast):
        return ToastState(toasts=tuple(
            t.model_copy(update={"open": False})
            if action.toast_id is None or t.id == action.toast_id
            else t
            for t in state.toasts
        ))

    if isinstance(action, RemoveToast):
        if action.toast_id is None:
            return ToastState()
        return ToastState(toasts=tuple(
            t for t in state.toasts if t.id != action.toast_id
        ))

    raise TypeError(f"Unknown toast action: {action!r}")
