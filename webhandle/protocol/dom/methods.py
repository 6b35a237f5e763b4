from __future__ import annotations

from typing_extensions import TypedDict

from webhandle.protocol.base import Response
from webhandle.protocol.dom.types import BoxModel, Node
from webhandle.protocol.runtime.types import RemoteObject


class GetBoxModelResult(TypedDict):
    model: BoxModel


class DescribeNodeResult(TypedDict):
    node: Node


class ResolveNodeResult(TypedDict):
    object: RemoteObject


GetBoxModelResponse = Response[GetBoxModelResult]
DescribeNodeResponse = Response[DescribeNodeResult]
ResolveNodeResponse = Response[ResolveNodeResult]
