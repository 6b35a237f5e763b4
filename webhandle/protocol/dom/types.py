from __future__ import annotations

from typing_extensions import NotRequired, TypedDict

Quad = list[float]


class BoxModel(TypedDict):
    """Box model of a node; each quad is four (x, y) corners, clockwise from top-left."""

    content: Quad
    padding: Quad
    border: Quad
    margin: Quad
    width: int
    height: int


class BackendNode(TypedDict):
    nodeType: int
    nodeName: str
    backendNodeId: int


class Node(TypedDict):
    nodeId: int
    backendNodeId: int
    nodeType: int
    nodeName: str
    localName: str
    nodeValue: str
    parentId: NotRequired[int]
    childNodeCount: NotRequired[int]
    children: NotRequired[list[Node]]
    attributes: NotRequired[list[str]]
    frameId: NotRequired[str]
    contentDocument: NotRequired[Node]
    shadowRoots: NotRequired[list[Node]]
    shadowRootType: NotRequired[str]
