"""
Toast Notification Models

A toast is a transient user-facing message. The notification manager
holds an ordered sequence of them and changes it only through the four
action kinds defined here.

DESIGN DECISION: Toasts, state and actions are frozen. The reducer
always builds a new state, which keeps it a pure function that tests
can call directly.
"""

from enum import Enum
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class ToastVariant(str, Enum):
    """Visual variant of a toast."""
    DEFAULT = "default"
    SUCCESS = "success"
    DESTRUCTIVE = "destructive"


class Toast(BaseModel):
    """A single toast notification."""
    model_config = ConfigDict(frozen=True)

    id: str
    # Display content is opaque to the manager
    title: Optional[Any] = None
    description: Optional[Any] = None
    open: bool = True
    variant: ToastVariant = ToastVariant.DEFAULT


class ToastUpdate(BaseModel):
    """
    Partial toast fields for an UPDATE.

    Only fields that were explicitly set are merged.
    """
    model_config = ConfigDict(frozen=True, extra="forbid")

    title: Optional[Any] = None
    description: Optional[Any] = None
    open: Optional[bool] = None
    variant: Optional[ToastVariant] = None

    def changes(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class ToastState(BaseModel):
    """The full notification state: newest toast first."""
    model_config = ConfigDict(frozen=True)

    toasts: tuple[Toast, ...] = ()


# =============================================================================
# ACTIONS
# =============================================================================

class AddToast(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["ADD_TOAST"] = "ADD_TOAST"
    toast: Toast


class UpdateToast(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["UPDATE_TOAST"] = "UPDATE_TOAST"
    toast_id: str
    update: ToastUpdate


class DismissToast(BaseModel):
    """Close one toast, or every toast when toast_id is None."""
    model_config = ConfigDict(frozen=True)

    type: Literal["DISMISS_TOAST"] = "DISMISS_TOAST"
    toast_id: Optional[str] = None


class RemoveToast(BaseModel):
    """Evict one toast, or every toast when toast_id is None."""
    model_config = ConfigDict(frozen=True)

    type: Literal["REMOVE_TOAST"] = "REMOVE_TOAST"
    toast_id: Optional[str] = None


ToastAction = Annotated[
    Union[AddToast, UpdateToast, DismissToast, RemoveToast],
    Field(discriminator="type"),
]
