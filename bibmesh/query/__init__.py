from .combinators import (
    And,
    Author,
    Journal,
    NodeKind,
    Not,
    Or,
    Query,
    Term,
    Title,
    UnfieldedTerm,
    Year,
    YearRange,
    author,
    journal,
    leaves,
    operands,
    title,
    unfielded,
    walk,
    year,
    year_range,
)
from .errors import MalformedQuery
from .parser import parse

__all__ = [
    "Query",
    "Term",
    "Author",
    "Title",
    "Journal",
    "Year",
    "YearRange",
    "UnfieldedTerm",
    "And",
    "Or",
    "Not",
    "NodeKind",
    "author",
    "title",
    "journal",
    "year",
    "year_range",
    "unfielded",
    "walk",
    "leaves",
    "operands",
    "parse",
    "MalformedQuery",
]
