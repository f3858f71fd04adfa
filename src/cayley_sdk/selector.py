'''
Selectors for traversal arguments

Each traversal argument is chosen from one of three axes (nodes, predicates,
tags). A selector says whether the argument is left out, is a single name, is a
list of names or, for predicates only, is a nested query.

Names are passed raw: quoting and escaping are done here, never by the caller.
'''

import json
import logging
from dataclasses import dataclass, field
from typing import Iterable, Tuple, Union, TYPE_CHECKING

from .error import QueryCompilationError

if TYPE_CHECKING:
    from .query import Path

logger = logging.getLogger(__name__)


def _names(values: Iterable[str]) -> Tuple[str, ...]:
    if isinstance(values, str):
        return (values,)
    return tuple(values)


# ============================================================================
# Node selectors
# ============================================================================

class NodeSelector:
    """Base class for node selectors"""


@dataclass(frozen=True)
class AnyNode(NodeSelector):
    """Matches any node"""


@dataclass(frozen=True)
class Node(NodeSelector):
    """Exactly one node"""
    name: str


@dataclass(frozen=True)
class Nodes(NodeSelector):
    """Several nodes, in the given order"""
    names: Tuple[str, ...]

    def __post_init__(self):
        object.__setattr__(self, 'names', _names(self.names))


# ============================================================================
# Tag selectors
# ============================================================================

class TagSelector:
    """Base class for tag selectors"""


@dataclass(frozen=True)
class AnyTag(TagSelector):
    """No tag"""


@dataclass(frozen=True)
class Tag(TagSelector):
    """Exactly one tag"""
    name: str


@dataclass(frozen=True)
class Tags(TagSelector):
    """Several tags, in the given order"""
    names: Tuple[str, ...]

    def __post_init__(self):
        object.__setattr__(self, 'names', _names(self.names))


# ============================================================================
# Predicate selectors
# ============================================================================

class PredicateSelector:
    """Base class for predicate selectors"""


@dataclass(frozen=True)
class AnyPredicate(PredicateSelector):
    """Any predicate"""


@dataclass(frozen=True)
class Predicate(PredicateSelector):
    """Exactly one predicate"""
    name: str


@dataclass(frozen=True)
class Predicates(PredicateSelector):
    """Several predicates, in the given order"""
    names: Tuple[str, ...]

    def __post_init__(self):
        object.__setattr__(self, 'names', _names(self.names))


@dataclass(frozen=True)
class FromQuery(PredicateSelector):
    '''
    Predicates produced by a nested path

    The path is copied on construction, so later changes to the caller's
    builder do not leak into this selector.
    '''
    query: 'Path' = field(compare=False)

    def __post_init__(self):
        object.__setattr__(self, 'query', self.query.copy())


# ============================================================================
# Formatting
# ============================================================================

def quote(name: str) -> str:
    '''
    Quote a single name as a double-quoted, escaped ASCII string literal
    '''
    return json.dumps(name)


def quote_list(names: Iterable[str]) -> str:
    '''
    Quote every name and join them with commas, preserving order
    '''
    return ",".join(quote(name) for name in names)


def format_names(selector: Union[NodeSelector, TagSelector]) -> str:
    '''
    Format a single node or tag selector as an argument list

    Any -> "", one name -> "a", many names -> "a","b"
    '''
    if isinstance(selector, (AnyNode, AnyTag)):
        return ""
    if isinstance(selector, (Node, Tag)):
        return quote(selector.name)
    if isinstance(selector, (Nodes, Tags)):
        return quote_list(selector.names)
    raise TypeError(f"Expected a node or tag selector, got {selector!r}")


def format_predicates(predicates: PredicateSelector) -> str:
    '''
    Format the predicate axis on its own

    Any predicate yields an empty string; the caller decides whether a
    ``null`` placeholder is needed.
    '''
    if isinstance(predicates, AnyPredicate):
        return ""
    if isinstance(predicates, Predicate):
        return quote(predicates.name)
    if isinstance(predicates, Predicates):
        return quote_list(predicates.names)
    if isinstance(predicates, FromQuery):
        try:
            return predicates.query.compile()
        except QueryCompilationError as e:
            logger.warning("Nested query failed to compile, emitting undefined: %s", e)
            return "undefined"
    raise TypeError(f"Expected a predicate selector, got {predicates!r}")


def format_arguments(predicates: PredicateSelector,
                     second: Union[NodeSelector, TagSelector]) -> str:
    '''
    Format a predicate selector together with a tag or node selector

    The predicate argument always comes first. When predicates are left out
    but the second axis is concrete, a literal ``null`` holds the predicate
    position.

    Examples:
        >>> format_arguments(AnyPredicate(), AnyTag())
        ''
        >>> format_arguments(AnyPredicate(), Tag("t"))
        'null, "t"'
        >>> format_arguments(Predicates(["follows", "status"]), AnyTag())
        '"follows","status"'
    '''
    first = format_predicates(predicates)
    rest = format_names(second)

    if not rest:
        return first
    if not first:
        first = "null"
    return f"{first}, {rest}"


__all__ = [
    'NodeSelector', 'AnyNode', 'Node', 'Nodes',
    'TagSelector', 'AnyTag', 'Tag', 'Tags',
    'PredicateSelector', 'AnyPredicate', 'Predicate', 'Predicates', 'FromQuery',
    'quote', 'quote_list', 'format_names', 'format_predicates', 'format_arguments',
]
