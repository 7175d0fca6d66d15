# bibmesh/transform.py
import logging

from bibmesh.providers import GVK, Provider, Springer, TransformResult, ZbMath
from bibmesh.query.combinators import Query
from bibmesh.query.parser import parse

logger = logging.getLogger(__name__)

PROVIDERS: dict[str, type[Provider]] = {
    "gvk": GVK,
    "springer": Springer,
    "zbmath": ZbMath,
}


def get_provider(name: str) -> Provider:
    """Instantiate a registered provider by name."""
    try:
        return PROVIDERS[name.lower()]()
    except KeyError:
        raise ValueError(
            f"Unknown provider: {name!r}. Available: {', '.join(sorted(PROVIDERS))}"
        ) from None


def transform_result(query: Query | str, provider: Provider | str) -> TransformResult:
    """
    Compile a query for one provider, keeping the dropped-clause diagnostics.

    Args:
        query: Query AST or query text such as ``author:Knuth AND year:1968``
        provider: Provider instance or registry name

    Raises:
        MalformedQuery: If query text cannot be parsed.
        ValueError: If the provider name is unknown.
    """
    if isinstance(provider, str):
        provider = get_provider(provider)
    if isinstance(query, str):
        logger.debug("Parsing query string: %s", query)
        query = parse(query)
    return provider.compile(query)


def transform(query: Query | str, provider: Provider | str) -> str | None:
    """
    Render a query in a provider's syntax.

    Returns None when the provider cannot express any part of the query.
    That is a capability gap, not an error: the caller should skip the
    provider or tell the user the query cannot run there.

    Examples:
        >>> transform("year:2018", "zbmath")
        'py:2018'
        >>> transform("year-range:2012-2015", "gvk") is None
        True
    """
    return transform_result(query, provider).query
