"""Toast notification package."""

from reimbursements.notifications.manager import (
    MAX_SAFE_INTEGER,
    ToastHandle,
    ToastManager,
    dismiss,
    get_toast_manager,
    reset_toast_manager,
    subscribe,
    toast,
)
from reimbursements.notifications.reducer import reducer
from reimbursements.notifications.scheduler import (
    ManualScheduler,
    ScheduledCall,
    Scheduler,
    ThreadingScheduler,
)

__all__ = [
    "MAX_SAFE_INTEGER",
    "ManualScheduler",
    "ScheduledCall",
    "Scheduler",
    "ThreadingScheduler",
    "ToastHandle",
    "ToastManager",
    "dismiss",
    "get_toast_manager",
    "reducer",
    "reset_toast_manager",
    "subscribe",
    "toast",
]
