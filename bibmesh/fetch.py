# bibmesh/fetch.py
"""Send a compiled query to the provider's search endpoint.

Only the request is handled here. The response body is returned untouched.
"""

import logging

import httpx

from bibmesh.providers.base import Provider
from bibmesh.query.combinators import Query
from bibmesh.transform import get_provider, transform_result

logger = logging.getLogger(__name__)

DEFAULT_MAX_RESULTS = 50


def build_request(
    query: Query | str,
    provider: Provider | str,
    max_results: int = DEFAULT_MAX_RESULTS,
) -> httpx.Request | None:
    """Build the GET request for a query, or None if the provider cannot express it."""
    if isinstance(provider, str):
        provider = get_provider(provider)

    result = transform_result(query, provider)
    for diagnostic in result.diagnostics:
        logger.warning("%s", diagnostic.message)
    if result.query is None:
        return None

    params = provider.request_params(result.query, max_results)
    return httpx.Request("GET", provider.BASE_URL, params=params)


async def fetch(
    query: Query | str,
    provider: Provider | str,
    *,
    client: httpx.AsyncClient | None = None,
    max_results: int = DEFAULT_MAX_RESULTS,
) -> str | None:
    """
    Run a query against a provider and return the raw response body.

    Args:
        query: Query AST or query text
        provider: Provider instance or registry name
        client: Client to send with; a short-lived one is created if omitted
        max_results: Page size requested from the provider

    Returns:
        The response text, or None if the provider cannot express the query
        (no request is sent in that case).

    Raises:
        MalformedQuery: If query text cannot be parsed.
        httpx.HTTPStatusError: If the provider answers with an error status.
    """
    request = build_request(query, provider, max_results)
    if request is None:
        logger.info("Skipping request: query cannot be expressed")
        return None

    logger.debug("Requesting: %s", request.url)
    if client is None:
        async with httpx.AsyncClient(timeout=30.0) as own_client:
            response = await own_client.send(request)
    else:
        response = await client.send(request)
    response.raise_for_status()
    logger.debug("Response status: %s", response.status_code)
    return response.text
