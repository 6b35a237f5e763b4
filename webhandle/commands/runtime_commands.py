from __future__ import annotations

from typing import Optional

from webhandle.protocol.base import Command
from webhandle.protocol.runtime.methods import (
    CallFunctionOnParams,
    CallFunctionOnResult,
    EvaluateParams,
    EvaluateResult,
    GetPropertiesParams,
    GetPropertiesResult,
    ReleaseObjectParams,
)
from webhandle.protocol.runtime.types import CallArgument


class RuntimeCommands:
    """Builders for Runtime domain commands."""

    @staticmethod
    def evaluate(
        expression: str,
        context_id: Optional[int] = None,
        return_by_value: Optional[bool] = None,
        await_promise: Optional[bool] = None,
    ) -> Command[EvaluateParams, EvaluateResult]:
        """Evaluate an expression in the global object of a context."""
        params = EvaluateParams(expression=expression)
        if context_id is not None:
            params['contextId'] = context_id
        if return_by_value is not None:
            params['returnByValue'] = return_by_value
        if await_promise is not None:
            params['awaitPromise'] = await_promise
        return Command(method='Runtime.evaluate', params=params)

    @staticmethod
    def call_function_on(
        function_declaration: str,
        object_id: Optional[str] = None,
        arguments: Optional[list[CallArgument]] = None,
        return_by_value: Optional[bool] = None,
        await_promise: Optional[bool] = None,
        execution_context_id: Optional[int] = None,
        user_gesture: Optional[bool] = None,
    ) -> Command[CallFunctionOnParams, CallFunctionOnResult]:
        """Call a function with ``this`` bound to the given object."""
        params = CallFunctionOnParams(functionDeclaration=function_declaration)
        if object_id is not None:
            params['objectId'] = object_id
        if arguments is not None:
            params['arguments'] = arguments
        if return_by_value is not None:
            params['returnByValue'] = return_by_value
        if await_promise is not None:
            params['awaitPromise'] = await_promise
        if execution_context_id is not None:
            params['executionContextId'] = execution_context_id
        if user_gesture is not None:
            params['userGesture'] = user_gesture
        return Command(method='Runtime.callFunctionOn', params=params)

    @staticmethod
    def get_properties(
        object_id: str, own_properties: bool = True
    ) -> Command[GetPropertiesParams, GetPropertiesResult]:
        return Command(
            method='Runtime.getProperties',
            params=GetPropertiesParams(objectId=object_id, ownProperties=own_properties),
        )

    @staticmethod
    def release_object(object_id: str) -> Command[ReleaseObjectParams, dict]:
        return Command(
            method='Runtime.releaseObject', params=ReleaseObjectParams(objectId=object_id)
        )
