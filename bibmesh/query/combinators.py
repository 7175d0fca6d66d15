# bibmesh/query/combinators.py
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar

from bibmesh.query.errors import MalformedQuery


class NodeKind(Enum):
    AUTHOR = "author"
    TITLE = "title"
    JOURNAL = "journal"
    YEAR = "year"
    YEAR_RANGE = "year-range"
    UNFIELDED = "unfielded"
    AND = "and"
    OR = "or"
    NOT = "not"


_PRECEDENCE = {NodeKind.OR: 1, NodeKind.AND: 2, NodeKind.NOT: 3}


@dataclass(frozen=True)
class Query:
    """Base AST node for search queries."""

    kind: ClassVar[NodeKind]

    def __and__(self, other: "Query") -> "And":
        return And(self, other)

    def __or__(self, other: "Query") -> "Or":
        return Or(self, other)

    def __invert__(self) -> "Not":
        return Not(self)

    @property
    def children(self) -> tuple["Query", ...]:
        return ()

    def _nested(self, parent: "Query") -> str:
        if _PRECEDENCE.get(self.kind, 4) < _PRECEDENCE.get(parent.kind, 4):
            return f"({self})"
        return str(self)


@dataclass(frozen=True)
class Term(Query):
    """Free-text leaf. The value is stored trimmed and is never empty."""

    value: str

    def __post_init__(self) -> None:
        value = self.value.strip()
        if not value:
            raise MalformedQuery("Empty term", self.value)
        object.__setattr__(self, "value", value)

    def __str__(self) -> str:
        value = f'"{self.value}"' if any(c.isspace() for c in self.value) else self.value
        if self.kind is NodeKind.UNFIELDED:
            return value
        return f"{self.kind.value}:{value}"


@dataclass(frozen=True)
class Author(Term):
    kind = NodeKind.AUTHOR


@dataclass(frozen=True)
class Title(Term):
    kind = NodeKind.TITLE


@dataclass(frozen=True)
class Journal(Term):
    kind = NodeKind.JOURNAL


@dataclass(frozen=True)
class Year(Term):
    """Single year, kept as text."""

    kind = NodeKind.YEAR


@dataclass(frozen=True)
class UnfieldedTerm(Term):
    kind = NodeKind.UNFIELDED


@dataclass(frozen=True)
class YearRange(Query):
    """Inclusive year range filter."""

    kind = NodeKind.YEAR_RANGE

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise MalformedQuery("Year range starts after it ends", f"{self.start}-{self.end}")

    def years(self) -> range:
        return range(self.start, self.end + 1)

    def __str__(self) -> str:
        return f"year-range:{self.start}-{self.end}"


@dataclass(frozen=True)
class And(Query):
    """Logical AND of two queries."""

    kind = NodeKind.AND

    left: Query
    right: Query

    @property
    def children(self) -> tuple[Query, ...]:
        return (self.left, self.right)

    def __str__(self) -> str:
        return " AND ".join(o._nested(self) for o in operands(self))


@dataclass(frozen=True)
class Or(Query):
    """Logical OR of two queries."""

    kind = NodeKind.OR

    left: Query
    right: Query

    @property
    def children(self) -> tuple[Query, ...]:
        return (self.left, self.right)

    def __str__(self) -> str:
        return " OR ".join(o._nested(self) for o in operands(self))


@dataclass(frozen=True)
class Not(Query):
    """Logical NOT of a query."""

    kind = NodeKind.NOT

    operand: Query

    @property
    def children(self) -> tuple[Query, ...]:
        return (self.operand,)

    def __str__(self) -> str:
        return f"NOT {self.operand._nested(self)}"


def walk(query: Query) -> Iterator[Query]:
    """Yield every node of the tree in postorder."""
    stack: list[tuple[Query, bool]] = [(query, False)]
    while stack:
        node, visited = stack.pop()
        if visited or not node.children:
            yield node
            continue
        stack.append((node, True))
        stack.extend((child, False) for child in reversed(node.children))


def operands(query: Query) -> list[Query]:
    """Flatten a chain of same-type And or Or nodes into its operands, left to right.

    Any other node is returned as its own single operand.
    """
    if not isinstance(query, (And, Or)):
        return [query]
    chain = type(query)
    result: list[Query] = []
    stack: list[Query] = [query]
    while stack:
        node = stack.pop()
        if type(node) is chain:
            stack.extend(reversed(node.children))
        else:
            result.append(node)
    return result


def leaves(query: Query) -> Iterator[Query]:
    """Yield the predicate nodes of the tree, left to right."""
    for node in walk(query):
        if not node.children:
            yield node


# Factory functions (public API)
def author(value: str) -> Author:
    return Author(value)


def title(value: str) -> Title:
    return Title(value)


def journal(value: str) -> Journal:
    return Journal(value)


def year(value: str | int) -> Year:
    return Year(str(value))


def year_range(start: int, end: int) -> YearRange:
    return YearRange(start, end)


def unfielded(value: str) -> UnfieldedTerm:
    return UnfieldedTerm(value)
