from __future__ import annotations

from typing import Optional

from webhandle.protocol.base import Command
from webhandle.protocol.dom.methods import (
    DescribeNodeResult,
    GetBoxModelResult,
    ResolveNodeResult,
)


class DomCommands:
    """Builders for DOM domain commands."""

    @staticmethod
    def get_box_model(object_id: str) -> Command[dict, GetBoxModelResult]:
        return Command(method='DOM.getBoxModel', params={'objectId': object_id})

    @staticmethod
    def describe_node(
        object_id: str,
        depth: Optional[int] = None,
        pierce: Optional[bool] = None,
    ) -> Command[dict, DescribeNodeResult]:
        params: dict = {'objectId': object_id}
        if depth is not None:
            params['depth'] = depth
        if pierce is not None:
            params['pierce'] = pierce
        return Command(method='DOM.describeNode', params=params)

    @staticmethod
    def resolve_node(
        node_id: Optional[int] = None,
        backend_node_id: Optional[int] = None,
        execution_context_id: Optional[int] = None,
    ) -> Command[dict, ResolveNodeResult]:
        """Resolve a node id (or backend node id) to a remote object handle."""
        params: dict = {}
        if node_id is not None:
            params['nodeId'] = node_id
        if backend_node_id is not None:
            params['backendNodeId'] = backend_node_id
        if execution_context_id is not None:
            params['executionContextId'] = execution_context_id
        return Command(method='DOM.resolveNode', params=params)

    @staticmethod
    def scroll_into_view_if_needed(object_id: str) -> Command[dict, dict]:
        return Command(method='DOM.scrollIntoViewIfNeeded', params={'objectId': object_id})

    @staticmethod
    def set_file_input_files(files: list[str], object_id: str) -> Command[dict, dict]:
        return Command(
            method='DOM.setFileInputFiles', params={'files': files, 'objectId': object_id}
        )
