# bibmesh/query/parser.py
"""Parser for the fielded search mini-language.

Examples::

    author:Knuth AND year:1968
    title:"deep learning" OR journal:Nature
    NOT author:Smith machine learning
    (title:graph OR title:network) year-range:2012-2015

Precedence is NOT > AND > OR and binary operators associate to the left.
Juxtaposed predicates are joined with AND. Keywords are case-insensitive.
"""

import logging
import re
from dataclasses import dataclass
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
)
from bibmesh.query.errors import MalformedQuery

logger = logging.getLogger(__name__)

TokenKind = Literal["lparen", "rparen", "and", "or", "not", "field", "word", "phrase"]

TEXT_FIELDS = {"author": Author, "title": Title, "journal": Journal}
FIELDS = frozenset({*TEXT_FIELDS, "year", "year-range"})
OPERATORS = {"AND": "and", "OR": "or", "NOT": "not"}

_FIELD_RE = re.compile(r"^([A-Za-z-]+):(.*)$", re.DOTALL)
_YEAR_RANGE_RE = re.compile(r"^(\d{4})-(\d{4})$")
_DELIMITERS = frozenset('()"')


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str
    # For field tokens: the lowercased field name and the value glued to the colon
    field: str | None = None
    quoted: bool = False


def tokenize(text: str) -> list[Token]:
    """Split query text into tokens."""
    tokens: list[Token] = []
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch.isspace():
            i += 1
        elif ch == "(":
            tokens.append(Token("lparen", ch))
            i += 1
        elif ch == ")":
            tokens.append(Token("rparen", ch))
            i += 1
        elif ch == '"':
            phrase, i = _read_phrase(text, i)
            tokens.append(Token("phrase", phrase, quoted=True))
        else:
            start = i
            while i < n and not text[i].isspace() and text[i] not in _DELIMITERS:
                i += 1
            word = text[start:i]
            match = _FIELD_RE.match(word)
            if word.upper() in OPERATORS:
                tokens.append(Token(OPERATORS[word.upper()], word))  # type: ignore[arg-type]
            elif match and match.group(1).lower() in FIELDS:
                name, rest = match.group(1).lower(), match.group(2)
                if not rest and i < n and text[i] == '"':
                    rest, i = _read_phrase(text, i)
                    tokens.append(Token("field", rest, field=name, quoted=True))
                else:
                    tokens.append(Token("field", rest, field=name))
            else:
                tokens.append(Token("word", word))
    return tokens


def _read_phrase(text: str, start: int) -> tuple[str, int]:
    end = text.find('"', start + 1)
    if end == -1:
        raise MalformedQuery("Unterminated quote", text[start:])
    phrase = text[start + 1 : end]
    if not phrase.strip():
        raise MalformedQuery("Empty quoted term", text[start : end + 1])
    return phrase, end + 1


class _Parser:
    """Recursive descent over a token list."""

    def __init__(self, text: str, tokens: list[Token]) -> None:
        self._text = text
        self._tokens = tokens
        self._pos = 0

    def _peek(self) -> Token | None:
        return self._tokens[self._pos] if self._pos < len(self._tokens) else None

    def _next(self) -> Token:
        token = self._tokens[self._pos]
        self._pos += 1
        return token

    def _starts_operand(self, token: Token | None) -> bool:
        return token is not None and token.kind in ("lparen", "not", "field", "word", "phrase")

    def parse(self) -> Query:
        query = self._or_expr()
        token = self._peek()
        if token is not None and token.kind == "rparen":
            raise MalformedQuery("Unbalanced parenthesis", self._text)
        if token is not None:
            raise MalformedQuery("Unexpected token", token.text)
        return query

    def _or_expr(self) -> Query:
        query = self._and_expr()
        while (token := self._peek()) is not None and token.kind == "or":
            self._next()
            query = Or(query, self._and_expr())
        return query

    def _and_expr(self) -> Query:
        query = self._not_expr()
        while True:
            token = self._peek()
            if token is not None and token.kind == "and":
                self._next()
                query = And(query, self._not_expr())
            elif self._starts_operand(token):
                query = And(query, self._not_expr())
            else:
                return query

    def _not_expr(self) -> Query:
        token = self._peek()
        if token is not None and token.kind == "not":
            self._next()
            return Not(self._not_expr())
        return self._primary()

    def _primary(self) -> Query:
        token = self._peek()
        if token is None:
            raise MalformedQuery("Dangling operator", self._text)
        match token.kind:
            case "lparen":
                self._next()
                if (inner := self._peek()) is not None and inner.kind == "rparen":
                    raise MalformedQuery("Empty parentheses", "()")
                query = self._or_expr()
                closing = self._peek()
                if closing is None or closing.kind != "rparen":
                    raise MalformedQuery("Unbalanced parenthesis", self._text)
                self._next()
                return query
            case "field":
                return self._field()
            case "phrase":
                self._next()
                return UnfieldedTerm(token.text)
            case "word":
                return UnfieldedTerm(" ".join(self._words()))
            case "rparen":
                raise MalformedQuery("Unbalanced parenthesis", self._text)
            case _:
                raise MalformedQuery("Dangling operator", token.text)

    def _words(self) -> list[str]:
        words: list[str] = []
        while (token := self._peek()) is not None and token.kind == "word":
            words.append(self._next().text)
        return words

    def _field(self) -> Query:
        token = self._next()
        name = token.field or ""

        if name in TEXT_FIELDS:
            following = self._peek()
            if token.quoted:
                value = token.text
            elif not token.text and following is not None and following.kind == "phrase":
                value = self._next().text
            else:
                value = " ".join(w for w in [token.text, *self._words()] if w)
            if not value.strip():
                raise MalformedQuery(f"Missing value for field {name!r}", f"{name}:")
            return TEXT_FIELDS[name](value)

        value = token.text
        if not value and not token.quoted:
            following = self._peek()
            if following is not None and following.kind in ("word", "phrase"):
                value = self._next().text
        if not value.strip():
            raise MalformedQuery(f"Missing value for field {name!r}", f"{name}:")

        if name == "year":
            return Year(value)

        match = _YEAR_RANGE_RE.match(value.strip())
        if match is None:
            raise MalformedQuery("Year range must look like YYYY-YYYY", f"{name}:{value}")
        return YearRange(int(match.group(1)), int(match.group(2)))


def parse(text: str) -> Query:
    """Parse query text into a Query AST.

    Raises:
        MalformedQuery: If the text is empty or structurally invalid.
    """
    if not text.strip():
        raise MalformedQuery("Empty query", text)
    tokens = tokenize(text)
    query = _Parser(text, tokens).parse()
    logger.debug("Parsed %r into %s", text, query)
    return query
