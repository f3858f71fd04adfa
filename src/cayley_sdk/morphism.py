"""
Named, reusable path fragments

A morphism is a path that starts nowhere in particular (``g.M()``) and can be
stored in the database under a name. Other paths then apply it through
``follow()`` or ``follow_r()``, which reference the morphism by name instead
of inlining its body.

Examples:
    >>> friend_of_friend = (Morphism.start("friendOfFriend")
    ...     .out(Predicate("follows"))
    ...     .out(Predicate("follows")))
    >>> friend_of_friend.save_statement()
    'friendOfFriend = g.M().Out("follows").Out("follows")'
    >>> graph.save(friend_of_friend)
    >>> graph.find(Vertex.start(Node("C")).follow(friend_of_friend).all())
"""

import re

from .error import QueryCompilationError, ReusableCannotBeSavedError
from .query import Path

# Morphisms are referenced unquoted, as script variables
_IDENTIFIER = re.compile(r"^[A-Za-z_\$][A-Za-z0-9_\$]*$")

# Names that would shadow the graph object or a script keyword
_RESERVED = frozenset([
    "g", "graph",
    "break", "case", "catch", "class", "const", "continue", "debugger",
    "default", "delete", "do", "else", "export", "extends", "false",
    "finally", "for", "function", "if", "import", "in", "instanceof", "let",
    "new", "null", "return", "super", "switch", "this", "throw", "true",
    "try", "typeof", "var", "void", "while", "with", "yield",
    "undefined", "NaN", "Infinity",
])


def check_name(name: str) -> str:
    if not isinstance(name, str) or not _IDENTIFIER.match(name):
        raise ValueError(f"morphism name must be an identifier, got {name!r}")
    if name in _RESERVED:
        raise ValueError(f"morphism name {name!r} is reserved")
    return name


class Reusable(Path):
    """
    A path that can be saved under a name and referenced by other paths
    """

    def __init__(self, root: str, name: str):
        """Internal constructor - use Morphism.start() instead"""
        super().__init__(root)
        self._name = name
        self._saved = False

    @property
    def name(self) -> str:
        """Get the name other paths use to reference this one"""
        return self._name

    def is_saved(self) -> bool:
        """Check if the assignment statement has been sent to the store"""
        return self._saved

    def mark_saved(self) -> None:
        """Record that the assignment statement has been sent"""
        self._saved = True

    def save_statement(self) -> str:
        """
        Build the statement assigning this path to its own name

        Returns:
            Statement text of the form ``name = <compiled body>``

        Raises:
            ReusableCannotBeSavedError: If the body fails to compile
        """
        return self.save_statement_as(self._name)

    def save_statement_as(self, name: str) -> str:
        """
        Build the statement assigning this path to another name

        The morphism keeps its own name; only the statement uses ``name``.

        Raises:
            ReusableCannotBeSavedError: If the body fails to compile
            ValueError: If name is not a valid identifier
        """
        check_name(name)
        try:
            compiled = self.compile()
        except QueryCompilationError as e:
            raise ReusableCannotBeSavedError(self._name, e.message) from e
        return f"{name} = {compiled}"


class Morphism(Reusable):
    """
    A named path fragment starting at ``g.M()``
    """

    @classmethod
    def start(cls, name: str) -> 'Morphism':
        """
        Begin a morphism that will be saved and referenced as ``name``

        Raises:
            ValueError: If name is not a valid identifier
        """
        return cls("g.M()", check_name(name))


__all__ = ['Reusable', 'Morphism']
