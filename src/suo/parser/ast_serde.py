"""
AST Serialization - JSON conversion for timeline ASTs.

Dependencies are limited to json (stdlib) and the node types, so tooling
can dump or compare ASTs without pulling in the pipeline or config layers.

Usage:
    from suo.parser.ast_serde import serialize_ast, deserialize_ast, node_to_dict
"""

import dataclasses
import json
from typing import Any, Dict, Union

from suo.parser.location import Span
from suo.parser.nodes import ASTNode, NodeType


def _span_to_dict(span: Span) -> Dict[str, Any]:
    return {
        'range': [span.start, span.end],
        'loc': {
            'start': {'line': span.loc.start.line, 'column': span.loc.start.column},
            'end': {'line': span.loc.end.line, 'column': span.loc.end.column},
        },
    }


def _value_to_dict(value: Any, include_location: bool) -> Any:
    if isinstance(value, ASTNode):
        return node_to_dict(value, include_location)
    if isinstance(value, tuple):
        return [_value_to_dict(v, include_location) for v in value]
    return value


def node_to_dict(node: ASTNode, include_location: bool = True) -> Dict[str, Any]:
    """
    Convert an AST node (recursively) to a plain dict.

    Args:
        node: Any AST node
        include_location: If False, spans and raw source text are left out,
            which makes dicts of the same structure compare equal regardless
            of how the source was formatted.
    """
    data: Dict[str, Any] = {'type': node.node_type.value}
    for f in dataclasses.fields(node):
        if f.name == 'span':
            if include_location:
                data.update(_span_to_dict(node.span))
            continue
        if f.name == 'raw' and not include_location:
            continue

        value = getattr(node, f.name)
        if value is None:
            continue
        if node.node_type == NodeType.NET_SYNC and f.name == 'fields':
            data['fields'] = [
                {'key': key, 'value': node_to_dict(literal, include_location)}
                for key, literal in value
            ]
            continue
        data[f.name] = _value_to_dict(value, include_location)
    return data


def serialize_ast(ast: ASTNode, include_location: bool = True) -> bytes:
    """
    Serialize AST to JSON bytes.

    Args:
        ast: Parsed Program (or any node)

    Returns:
        UTF-8 encoded JSON bytes
    """
    data = node_to_dict(ast, include_location)
    return json.dumps(data, separators=(',', ':'), ensure_ascii=False).encode('utf-8')


def deserialize_ast(data: Union[bytes, str]) -> Dict[str, Any]:
    """
    Deserialize AST from JSON bytes or string.

    Returns:
        Dict representation of AST
    """
    if isinstance(data, bytes):
        return json.loads(data.decode('utf-8'))
    return json.loads(data)


def count_ast_nodes(ast_dict: Dict[str, Any]) -> int:
    """
    Count nodes in a serialized AST.

    Args:
        ast_dict: Deserialized AST dictionary

    Returns:
        Total node count
    """
    count = 1
    for key, val in ast_dict.items():
        if key in ('loc', 'range'):
            continue
        if isinstance(val, list):
            for item in val:
                if isinstance(item, dict):
                    count += count_ast_nodes(item) if 'type' in item else count_ast_nodes(item) - 1
        elif isinstance(val, dict) and 'type' in val:
            count += count_ast_nodes(val)
    return count
