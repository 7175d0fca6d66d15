# bibmesh/providers/base.py
"""Base class for query transformers.

A provider turns the provider-neutral Query AST into the literal query string
of one search service. Subclasses only answer small questions (which prefix
marks an author, which token means OR); the walk over the tree, operator
precedence and elision of unsupported clauses live here.

A hook that returns ``None`` (or an empty string) signals a capability gap.
The affected clause is dropped, a :class:`Diagnostic` is recorded, and the
rest of the query is still compiled.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import IntEnum
from typing import Literal

from bibmesh.query.combinators import (
    And,
    Author,
    Journal,
    Not,
    Or,
    Query,
    Title,
    UnfieldedTerm,
    Year,
    YearRange,
    operands,
)

logger = logging.getLogger(__name__)

Capability = Literal[
    "author", "title", "journal", "year", "year-range", "unfielded", "and", "or", "not"
]


@dataclass(frozen=True)
class Diagnostic:
    """A clause dropped because the provider cannot express it."""

    provider: str
    capability: Capability
    fragment: str

    @property
    def message(self) -> str:
        return f"{self.provider} does not support {self.capability}; dropped {self.fragment}"


@dataclass(frozen=True)
class TransformResult:
    """Compiled query string, or None if nothing could be expressed."""

    query: str | None
    diagnostics: tuple[Diagnostic, ...] = ()

    def __bool__(self) -> bool:
        return self.query is not None


class _Binding(IntEnum):
    OR = 1
    AND = 2
    NOT = 3
    ATOM = 4


@dataclass(frozen=True)
class _Fragment:
    text: str
    binding: _Binding


class Provider(ABC):
    """Base class for provider query transformers.

    Instances hold only static configuration and may be shared freely
    between threads and tasks.
    """

    name: str
    BASE_URL: str
    # Join handle_year fragments with OR instead of calling handle_year_range
    expands_year_range: bool = False

    def __init__(self, api_key: str | None = None) -> None:
        self._api_key = api_key or self._load_from_env()

    @abstractmethod
    def _load_from_env(self) -> str | None:
        """Load API key from environment variable."""
        ...

    # Operator tokens

    @abstractmethod
    def logical_and_operator(self) -> str | None: ...

    @abstractmethod
    def logical_or_operator(self) -> str | None: ...

    @abstractmethod
    def logical_not_operator(self) -> str | None: ...

    # Field handlers

    @abstractmethod
    def handle_author(self, author: str) -> str | None: ...

    @abstractmethod
    def handle_title(self, title: str) -> str | None: ...

    @abstractmethod
    def handle_journal(self, journal: str) -> str | None: ...

    @abstractmethod
    def handle_year(self, year: str) -> str | None: ...

    def handle_year_range(self, start: int, end: int) -> str | None:
        """Native range syntax. Unsupported unless overridden."""
        return None

    @abstractmethod
    def handle_unfielded_term(self, term: str) -> str | None: ...

    @abstractmethod
    def request_params(self, query: str, max_results: int) -> dict[str, str | int]:
        """Query parameters for a search request carrying the compiled query."""
        ...

    def quote(self, value: str) -> str:
        """Wrap multi-word values in double quotes."""
        if value.startswith('"') and value.endswith('"') and len(value) > 1:
            return value
        if any(c.isspace() for c in value):
            return f'"{value}"'
        return value

    def group(self, fragment: str) -> str:
        return f"({fragment})"

    def compile(self, query: Query) -> TransformResult:
        """Compile a Query AST into this provider's query syntax."""
        diagnostics: list[Diagnostic] = []
        fragment = self._compile(query, diagnostics)
        if fragment is None:
            logger.info("%s cannot express any part of %s", self.name, query)
            return TransformResult(None, tuple(diagnostics))
        logger.debug("Translated query for %s: %s", self.name, fragment.text)
        return TransformResult(fragment.text, tuple(diagnostics))

    def _compile(self, query: Query, diagnostics: list[Diagnostic]) -> _Fragment | None:
        match query:
            case Author(value=v):
                return self._leaf(query, "author", self.handle_author(self.quote(v)), diagnostics)
            case Title(value=v):
                return self._leaf(query, "title", self.handle_title(self.quote(v)), diagnostics)
            case Journal(value=v):
                return self._leaf(query, "journal", self.handle_journal(self.quote(v)), diagnostics)
            case Year(value=v):
                return self._leaf(query, "year", self.handle_year(self.quote(v)), diagnostics)
            case UnfieldedTerm(value=v):
                return self._leaf(
                    query, "unfielded", self.handle_unfielded_term(self.quote(v)), diagnostics
                )
            case YearRange(start=s, end=e):
                if self.expands_year_range:
                    years = [self._compile(Year(str(y)), diagnostics) for y in query.years()]
                    return self._join(query, "or", years, diagnostics)
                return self._leaf(query, "year-range", self.handle_year_range(s, e), diagnostics)
            case And():
                parts = [self._compile(o, diagnostics) for o in operands(query)]
                return self._join(query, "and", parts, diagnostics)
            case Or():
                parts = [self._compile(o, diagnostics) for o in operands(query)]
                return self._join(query, "or", parts, diagnostics)
            case Not(operand=o):
                inner = self._compile(o, diagnostics)
                if inner is None:
                    return None
                operator = self.logical_not_operator()
                if not operator:
                    self._drop(query, "not", diagnostics)
                    return None
                return _Fragment(operator + self._wrap(inner, _Binding.NOT), _Binding.NOT)
            case _:
                raise ValueError(f"Unsupported query node: {query}")

    def _leaf(
        self,
        query: Query,
        capability: Capability,
        text: str | None,
        diagnostics: list[Diagnostic],
    ) -> _Fragment | None:
        if not text:
            self._drop(query, capability, diagnostics)
            return None
        return _Fragment(text, _Binding.ATOM)

    def _join(
        self,
        query: Query,
        capability: Literal["and", "or"],
        parts: list[_Fragment | None],
        diagnostics: list[Diagnostic],
    ) -> _Fragment | None:
        present = [p for p in parts if p is not None]
        if len(present) <= 1:
            # Elided operands leave nothing to join, no operator needed
            return present[0] if present else None

        if capability == "and":
            operator, binding = self.logical_and_operator(), _Binding.AND
        else:
            operator, binding = self.logical_or_operator(), _Binding.OR
        if not operator:
            self._drop(query, capability, diagnostics)
            return None

        return _Fragment(operator.join(self._wrap(p, binding) for p in present), binding)

    def _wrap(self, fragment: _Fragment, parent: _Binding) -> str:
        if fragment.binding < parent:
            return self.group(fragment.text)
        return fragment.text

    def _drop(self, query: Query, capability: Capability, diagnostics: list[Diagnostic]) -> None:
        diagnostic = Diagnostic(self.name, capability, str(query))
        logger.debug("%s", diagnostic.message)
        diagnostics.append(diagnostic)

