from __future__ import annotations

import base64
import re
from dataclasses import dataclass
from typing import Any

from webhandle.exceptions import EvaluationError, InvalidDataURI
from webhandle.protocol.runtime.types import CallArgument, RemoteObject

_FUNCTION_DECLARATION_RE = re.compile(
    r'^\s*(async\s+)?(function\b|\([^()]*\)\s*=>|[A-Za-z_$][\w$]*\s*=>)'
)


@dataclass(frozen=True)
class ObjectRef:
    """A bare remote object id to be passed to a script by handle."""

    object_id: str


def decode_base64_to_bytes(data: str) -> bytes:
    """Decode a base64 string into raw bytes."""
    return base64.b64decode(data.encode('ascii'))


def is_function_declaration(script: str) -> bool:
    """Whether the script is a function or arrow function rather than an expression."""
    return bool(_FUNCTION_DECLARATION_RE.match(script))


def to_function_declaration(script: str) -> str:
    """
    Normalize a script into a function declaration for Runtime.callFunctionOn.

    Function scripts are applied to the call arguments with ``this`` preserved,
    so arrow functions see the bound object too; plain expressions are returned
    from a zero-argument wrapper.
    """
    if is_function_declaration(script):
        return f'function () {{ return ({script}).apply(this, arguments) }}'
    return f'function () {{ return ({script}) }}'


def to_call_argument(value: Any) -> CallArgument:
    """Encode a positional script argument; anything with an ``object_id`` goes by handle."""
    object_id = getattr(value, 'object_id', None)
    if isinstance(object_id, str):
        return CallArgument(objectId=object_id)
    return CallArgument(value=value)


def extract_remote_object(response: dict) -> RemoteObject:
    """
    Pull the RemoteObject out of an evaluate/callFunctionOn response.

    Raises:
        EvaluationError: If the page reported a thrown exception.
    """
    result = response['result']
    details = result.get('exceptionDetails')
    if details:
        exception = details.get('exception', {})
        raise EvaluationError(exception.get('description') or details.get('text'))
    return result['result']


def parse_data_uri(uri: str) -> tuple[str, bytes]:
    """
    Split a base64 data URI into its media type and decoded payload.

    Args:
        uri: Value such as ``data:image/png;base64,iVBOR...``.

    Returns:
        Tuple of (media type, decoded bytes).

    Raises:
        InvalidDataURI: If the value is not a base64 data URI.
    """
    if not isinstance(uri, str) or not uri.startswith('data:') or ',' not in uri:
        raise InvalidDataURI(f'Not a data URI: {str(uri)[:40]!r}')

    header, payload = uri.split(',', 1)
    if not header.endswith(';base64'):
        raise InvalidDataURI(f'Data URI is not base64 encoded: {header!r}')

    media_type = header[len('data:') : -len(';base64')]
    return media_type, decode_base64_to_bytes(payload)


__all__ = [
    'ObjectRef',
    'decode_base64_to_bytes',
    'extract_remote_object',
    'is_function_declaration',
    'parse_data_uri',
    'to_call_argument',
    'to_function_declaration',
]
