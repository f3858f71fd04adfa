'''
Path builders for fluent Gremlin query construction

This module provides the builder API for constructing Cayley Gremlin queries
without manually concatenating strings. Every traversal call appends one
formatted segment; ``compile()`` joins the segments with dots.

Examples:
    >>> from cayley_sdk import Vertex, Node, Predicate
    >>> Vertex.start(Node("foo")).out(Predicate("bar")).all().compile()
    'g.V("foo").Out("bar").All()'
'''

import copy
import logging
from typing import List, Tuple, TypeVar, TYPE_CHECKING

from .error import PathFinalizedError, QueryCompilationError
from .selector import (
    AnyNode,
    AnyPredicate,
    AnyTag,
    FromQuery,
    NodeSelector,
    Predicate,
    PredicateSelector,
    Tag,
    TagSelector,
    format_arguments,
    format_names,
)

if TYPE_CHECKING:
    from .morphism import Reusable

logger = logging.getLogger(__name__)

P = TypeVar('P', bound='Path')
Q = TypeVar('Q', bound='Query')


def _expect(value, kind: type, what: str):
    if not isinstance(value, kind):
        raise TypeError(f"Expected a {what} selector, got {value!r}")
    return value


class Path:
    '''
    Ordered sequence of Gremlin call segments

    Path holds the traversal operations shared by vertex queries and
    morphisms. All operations mutate the path in place and return it, so
    calls can be chained.
    '''

    def __init__(self, root: str):
        '''
        Initialize the path with its root call segment
        '''
        self._segments: List[str] = [root]
        self._finalized = False
        self._problems: List[str] = []
        self._follows: List['Reusable'] = []

    # ------------------------------------------------------------------ core

    def _add(self: P, segment: str) -> P:
        if self._finalized:
            raise PathFinalizedError(segment)
        self._segments.append(segment)
        return self

    def _absorb(self, other: 'Path'):
        # Morphisms followed inside a nested path count as followed here too
        for reusable in other._follows:
            if reusable not in self._follows:
                self._follows.append(reusable)

    def _call(self: P, name: str, predicates: PredicateSelector, second) -> P:
        _expect(predicates, PredicateSelector, "predicate")
        self._add(f"{name}({format_arguments(predicates, second)})")
        if isinstance(predicates, FromQuery):
            self._absorb(predicates.query)
        return self

    @property
    def segments(self) -> Tuple[str, ...]:
        '''
        Get the formatted segments, root call first
        '''
        return tuple(self._segments)

    def is_finalized(self) -> bool:
        '''
        Check if a terminal operation has been applied
        '''
        return self._finalized

    def followed(self) -> List['Reusable']:
        '''
        Get the morphisms referenced by this path, including nested paths
        '''
        return list(self._follows)

    def compile(self) -> str:
        '''
        Render the path as query text

        Returns:
            The segments joined by dots

        Raises:
            QueryCompilationError: If the path was built with malformed arguments
        '''
        if self._problems:
            raise QueryCompilationError("; ".join(self._problems))
        return ".".join(self._segments)

    def copy(self: P) -> P:
        '''
        Clone the path so a shared prefix can be extended independently
        '''
        clone = copy.copy(self)
        clone._segments = list(self._segments)
        clone._problems = list(self._problems)
        clone._follows = list(self._follows)
        return clone

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {'.'.join(self._segments)}>"

    # ------------------------------------------------------------- traversal

    def out(self: P, predicates: PredicateSelector = AnyPredicate(),
            tags: TagSelector = AnyTag()) -> P:
        '''
        Follow outbound edges matching the predicates
        '''
        return self._call("Out", predicates, _expect(tags, TagSelector, "tag"))

    def in_(self: P, predicates: PredicateSelector = AnyPredicate(),
            tags: TagSelector = AnyTag()) -> P:
        '''
        Follow inbound edges matching the predicates
        '''
        return self._call("In", predicates, _expect(tags, TagSelector, "tag"))

    def both(self: P, predicates: PredicateSelector = AnyPredicate(),
             tags: TagSelector = AnyTag()) -> P:
        '''
        Follow edges in both directions
        '''
        return self._call("Both", predicates, _expect(tags, TagSelector, "tag"))

    def is_(self: P, nodes: NodeSelector = AnyNode()) -> P:
        '''
        Keep only the given nodes
        '''
        return self._add(f"Is({format_names(_expect(nodes, NodeSelector, 'node'))})")

    def has(self: P, predicates: PredicateSelector = AnyPredicate(),
            nodes: NodeSelector = AnyNode()) -> P:
        '''
        Keep only nodes having an edge with the predicates to the given nodes
        '''
        return self._call("Has", predicates, _expect(nodes, NodeSelector, "node"))

    # --------------------------------------------------------------- tagging

    def tag(self: P, tags: TagSelector = AnyTag()) -> P:
        '''
        Tag the current nodes so they appear in the results
        '''
        return self._add(f"Tag({format_names(_expect(tags, TagSelector, 'tag'))})")

    def as_(self: P, tags: TagSelector = AnyTag()) -> P:
        '''
        Alias of tag(), rendered as As(...)
        '''
        return self._add(f"As({format_names(_expect(tags, TagSelector, 'tag'))})")

    def back(self: P, tags: TagSelector = AnyTag()) -> P:
        '''
        Return to the nodes recorded under a tag
        '''
        return self._add(f"Back({format_names(_expect(tags, TagSelector, 'tag'))})")

    def save(self: P, predicates: PredicateSelector = AnyPredicate(),
             tags: TagSelector = AnyTag()) -> P:
        '''
        Save the object of the predicate into the result under the tag

        Save() needs exactly one predicate and exactly one tag. Anything else
        still appends the segment, but makes compile() fail.
        '''
        self._call("Save", predicates, _expect(tags, TagSelector, "tag"))
        if not isinstance(predicates, Predicate):
            self._problems.append(f"Save() needs exactly one predicate, got {predicates!r}")
        if not isinstance(tags, Tag):
            self._problems.append(f"Save() needs exactly one tag, got {tags!r}")
        return self

    # --------------------------------------------------------------- joining

    def _join(self: P, name: str, other: 'Path') -> P:
        if not isinstance(other, Path):
            raise TypeError(f"Expected a path, got {other!r}")
        self._add(f"{name}({other.compile()})")
        self._absorb(other)
        return self

    def and_(self: P, other: 'Path') -> P:
        '''
        Intersect with the nodes of another path

        Raises:
            QueryCompilationError: If the other path cannot be compiled
        '''
        return self._join("And", other)

    def intersect(self: P, other: 'Path') -> P:
        '''
        Alias of and_()
        '''
        return self.and_(other)

    def or_(self: P, other: 'Path') -> P:
        '''
        Union with the nodes of another path

        Raises:
            QueryCompilationError: If the other path cannot be compiled
        '''
        return self._join("Or", other)

    def union(self: P, other: 'Path') -> P:
        '''
        Alias of or_()
        '''
        return self.or_(other)

    # ------------------------------------------------------------ morphisms

    def _reference(self: P, name: str, reusable: 'Reusable') -> P:
        from .morphism import Reusable
        if not isinstance(reusable, Reusable):
            raise TypeError(f"Expected a morphism, got {reusable!r}")
        if not reusable.is_saved():
            logger.warning("Following morphism %r which has not been saved yet", reusable.name)
        self._add(f"{name}({reusable.name})")
        if reusable not in self._follows:
            self._follows.append(reusable)
        # The store resolves nested Follow() calls by name as well
        self._absorb(reusable)
        return self

    def follow(self: P, reusable: 'Reusable') -> P:
        '''
        Apply a saved morphism, referenced by name
        '''
        return self._reference("Follow", reusable)

    def follow_r(self: P, reusable: 'Reusable') -> P:
        '''
        Apply a saved morphism in reverse, referenced by name
        '''
        return self._reference("FollowR", reusable)


class Query(Path):
    '''
    A path that can be finalized and executed

    Terminal operations append their own segment and move the path into the
    finalized state. The transition is one-way: afterwards no further
    segment may be appended.
    '''

    def _finish(self: Q, segment: str) -> Q:
        self._add(segment)
        self._finalized = True
        return self

    def all(self: Q) -> Q:
        '''
        Finalize: return every result
        '''
        return self._finish("All()")

    def get_limit(self: Q, limit: int) -> Q:
        '''
        Finalize: return at most ``limit`` results

        Raises:
            ValueError: If limit is not a non-negative integer
        '''
        if isinstance(limit, bool) or not isinstance(limit, int) or limit < 0:
            raise ValueError(f"limit must be a non-negative integer, got {limit!r}")
        return self._finish(f"GetLimit({limit})")

    def to_array(self: Q) -> Q:
        '''
        Finalize: return the result nodes as an array
        '''
        return self._finish("ToArray()")

    def to_value(self: Q) -> Q:
        '''
        Finalize: return a single result node
        '''
        return self._finish("ToValue()")

    def tag_array(self: Q) -> Q:
        '''
        Finalize: return the tag maps of every result
        '''
        return self._finish("TagArray()")

    def tag_value(self: Q) -> Q:
        '''
        Finalize: return the tag map of a single result
        '''
        return self._finish("TagValue()")


class Vertex(Query):
    '''
    Query path starting from graph vertices

    Examples:
        >>> Vertex.start(AnyNode()).all().compile()
        'g.V().All()'
        >>> Vertex.start(Nodes(["D", "B"])).save(Predicate("follows"), Tag("target")).compile()
        'g.V("D","B").Save("follows", "target")'
    '''

    @classmethod
    def start(cls, nodes: NodeSelector = AnyNode()) -> 'Vertex':
        '''
        Begin a path at the given nodes, or at every node
        '''
        return cls(f"g.V({format_names(_expect(nodes, NodeSelector, 'node'))})")


__all__ = ['Path', 'Query', 'Vertex']
