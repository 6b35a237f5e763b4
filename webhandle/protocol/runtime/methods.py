from __future__ import annotations

from typing_extensions import NotRequired, TypedDict

from webhandle.protocol.base import Response
from webhandle.protocol.runtime.types import (
    CallArgument,
    ExceptionDetails,
    PropertyDescriptor,
    RemoteObject,
)


class CallFunctionOnParams(TypedDict, total=False):
    functionDeclaration: str
    objectId: str
    arguments: list[CallArgument]
    returnByValue: bool
    awaitPromise: bool
    executionContextId: int
    userGesture: bool


class CallFunctionOnResult(TypedDict):
    result: RemoteObject
    exceptionDetails: NotRequired[ExceptionDetails]


class EvaluateParams(TypedDict, total=False):
    expression: str
    contextId: int
    returnByValue: bool
    awaitPromise: bool


class EvaluateResult(TypedDict):
    result: RemoteObject
    exceptionDetails: NotRequired[ExceptionDetails]


class GetPropertiesParams(TypedDict, total=False):
    objectId: str
    ownProperties: bool


class GetPropertiesResult(TypedDict):
    result: list[PropertyDescriptor]


class ReleaseObjectParams(TypedDict):
    objectId: str


CallFunctionOnResponse = Response[CallFunctionOnResult]
EvaluateResponse = Response[EvaluateResult]
GetPropertiesResponse = Response[GetPropertiesResult]
