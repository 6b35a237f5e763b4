from __future__ import annotations

from typing import Any

from typing_extensions import NotRequired, TypedDict


class RemoteObject(TypedDict):
    """Mirror object referencing the original JavaScript object."""

    type: str
    subtype: NotRequired[str]
    className: NotRequired[str]
    value: NotRequired[Any]
    unserializableValue: NotRequired[str]
    description: NotRequired[str]
    objectId: NotRequired[str]


class CallArgument(TypedDict, total=False):
    """Argument of a Runtime.callFunctionOn call; exactly one field is set."""

    value: Any
    unserializableValue: str
    objectId: str


class ExceptionDetails(TypedDict):
    exceptionId: int
    text: str
    lineNumber: int
    columnNumber: int
    exception: NotRequired[RemoteObject]


class PropertyDescriptor(TypedDict):
    name: str
    value: NotRequired[RemoteObject]
