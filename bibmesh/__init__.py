# bibmesh/__init__.py
"""bibmesh - Provider-neutral bibliographic queries rendered per search service."""

from bibmesh.fetch import build_request, fetch
from bibmesh.providers import GVK, Diagnostic, Provider, Springer, TransformResult, ZbMath
from bibmesh.query import (
    And,
    Author,
    Journal,
    MalformedQuery,
    Not,
    Or,
    Query,
    Title,
    UnfieldedTerm,
    Year,
    YearRange,
    author,
    journal,
    parse,
    title,
    unfielded,
    year,
    year_range,
)
from bibmesh.transform import PROVIDERS, get_provider, transform, transform_result

__all__ = [
    # Query combinators
    "Query",
    "Author",
    "Title",
    "Journal",
    "Year",
    "YearRange",
    "UnfieldedTerm",
    "And",
    "Or",
    "Not",
    "author",
    "title",
    "journal",
    "year",
    "year_range",
    "unfielded",
    "parse",
    "MalformedQuery",
    # Providers
    "Provider",
    "GVK",
    "ZbMath",
    "Springer",
    "Diagnostic",
    "TransformResult",
    "PROVIDERS",
    "get_provider",
    # Transformation
    "transform",
    "transform_result",
    "build_request",
    "fetch",
]
