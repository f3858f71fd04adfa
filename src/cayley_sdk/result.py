'''
Result decoding and typed deserialization

This module turns the JSON envelope Cayley sends back for a query into an
ordered collection of rows, and provides helpers for deserializing those rows
into Python types.

The only supported envelope shapes are::

    {"result": null}
    {"result": [{"id": "alice"}, {"id": "bob", "tag": "x"}]}
'''

import json
from typing import Any, Dict, Iterator, List, Optional, Type, TypeVar, Union

from .error import DecodingError, SerializationError, from_bytes

T = TypeVar('T')

GraphNode = Dict[str, str]
'''A single result row: column name to string value'''


class GraphNodes:
    '''
    Ordered collection of result rows, in the order the store returned them

    GraphNodes provides convenient methods for inspecting query results and
    deserializing them into Python types.
    '''

    def __init__(self, rows: Optional[List[GraphNode]] = None):
        '''
        Create a new GraphNodes from already decoded rows
        '''
        self._rows: List[GraphNode] = list(rows) if rows else []

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[GraphNode]:
        return iter(self._rows)

    def __getitem__(self, index: int) -> GraphNode:
        return self._rows[index]

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, GraphNodes):
            return self._rows == other._rows
        return NotImplemented

    def __repr__(self) -> str:
        return f"GraphNodes({self._rows!r})"

    def row_count(self) -> int:
        '''
        Get the number of rows in the result
        '''
        return len(self._rows)

    def column_names(self) -> List[str]:
        '''
        Get every column name appearing in the result, in first-seen order
        '''
        names: Dict[str, None] = {}
        for row in self._rows:
            for key in row:
                names.setdefault(key, None)
        return list(names)

    def get_row(self, index: int) -> Optional[GraphNode]:
        '''
        Get a specific row by index
        '''
        if 0 <= index < len(self._rows):
            return self._rows[index]
        return None

    def is_empty(self) -> bool:
        '''
        Check if the result is empty (no rows)
        '''
        return len(self._rows) == 0

    def rows(self) -> List[GraphNode]:
        '''
        Get all rows
        '''
        return list(self._rows)

    def ids(self) -> List[str]:
        '''
        Get the ``id`` column of every row that has one

        Examples:
            >>> nodes = graph.find(Vertex.start(Node("C")).out(Predicate("follows")).all())
            >>> nodes.ids()
            ['B', 'D']
        '''
        return [row["id"] for row in self._rows if "id" in row]

    def deserialize_rows(self, target_type: Type[T]) -> List[T]:
        '''
        Deserialize all rows into instances of the target type

        Args:
            target_type: A class/type to deserialize into (e.g., a dataclass)

        Returns:
            List of deserialized objects

        Raises:
            SerializationError: If deserialization fails

        Examples:
            >>> @dataclass
            >>> class Follower:
            ...     id: str
            >>>
            >>> followers = nodes.deserialize_rows(Follower)
        '''
        return [self.deserialize_row(row, target_type) for row in self._rows]

    def deserialize_row(self, row: GraphNode, target_type: Type[T]) -> T:
        '''
        Deserialize a single row dict into an instance of the target type

        Raises:
            SerializationError: If deserialization fails
        '''
        try:
            return target_type(**row)
        except TypeError as e:
            raise SerializationError(f"Failed to deserialize row {row!r}: {e}") from e

    def first(self, target_type: Type[T]) -> T:
        '''
        Get the first row as the given type

        Raises:
            SerializationError: If no rows exist or deserialization fails
        '''
        if self.is_empty():
            raise SerializationError("No rows returned")

        return self.deserialize_row(self._rows[0], target_type)


# ============================================================================
# Decoding
# ============================================================================

def _decode_row(item: Any, index: int, text: str) -> GraphNode:
    if not isinstance(item, dict):
        raise DecodingError(f"result[{index}] is not an object", text)
    for key, value in item.items():
        if not isinstance(value, str):
            raise DecodingError(
                f"result[{index}][{key!r}] is {type(value).__name__}, expected string", text)
    return dict(item)


def decode_nodes(source: Union[bytes, str]) -> GraphNodes:
    '''
    Decode a raw response body into rows

    Args:
        source: Response body as returned by the transport

    Returns:
        GraphNodes, empty when ``result`` is absent or null

    Raises:
        ResponseParseError: If the bytes are not valid UTF-8
        DecodingError: If the text is not a valid result envelope
    '''
    text = from_bytes(source)

    try:
        envelope = json.loads(text)
    except json.JSONDecodeError as e:
        raise DecodingError.from_json_error(e, text) from e

    if not isinstance(envelope, dict):
        raise DecodingError(f"expected a JSON object, got {type(envelope).__name__}", text)

    result = envelope.get("result")
    if result is None:
        return GraphNodes()
    if not isinstance(result, list):
        raise DecodingError(f"'result' must be a list or null, got {type(result).__name__}", text)

    return GraphNodes([_decode_row(item, i, text) for i, item in enumerate(result)])


__all__ = ['GraphNode', 'GraphNodes', 'decode_nodes']
