from __future__ import annotations

from typing import Any, Generic, TypeVar

from typing_extensions import NotRequired, TypedDict

T_CommandParams = TypeVar('T_CommandParams')
T_CommandResponse = TypeVar('T_CommandResponse')


class Command(TypedDict, Generic[T_CommandParams, T_CommandResponse]):
    """A protocol command ready to be sent over the connection."""

    method: str
    params: NotRequired[T_CommandParams]
    sessionId: NotRequired[str]


class ErrorPayload(TypedDict):
    code: int
    message: str
    data: NotRequired[Any]


class Response(TypedDict, Generic[T_CommandResponse]):
    """Raw protocol response as returned by the connection."""

    id: NotRequired[int]
    result: NotRequired[T_CommandResponse]
    error: NotRequired[ErrorPayload]
