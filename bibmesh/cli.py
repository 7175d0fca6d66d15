# bibmesh/cli.py
import asyncio
import logging
import sys
from typing import Annotated

import cyclopts
import httpx

from bibmesh.fetch import DEFAULT_MAX_RESULTS, build_request, fetch as do_fetch
from bibmesh.providers import Provider
from bibmesh.query import MalformedQuery, Query, parse
from bibmesh.transform import PROVIDERS, get_provider

app = cyclopts.App(
    name="bibmesh",
    help="Translate bibliographic search queries into provider query syntax.",
)

ProviderOption = Annotated[
    list[str],
    cyclopts.Parameter(
        name=["--provider", "-p"], help=f"Providers to target ({', '.join(sorted(PROVIDERS))})"
    ),
]
VerboseOption = Annotated[
    bool,
    cyclopts.Parameter(name=["--verbose", "-v"], help="Log debug output to stderr"),
]


def _setup(query: str, providers: list[str], verbose: bool) -> tuple[Query, list[Provider]]:
    """Configure logging, parse the query and instantiate providers, exiting on bad input."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )

    invalid = [p for p in providers if p.lower() not in PROVIDERS]
    if invalid:
        print(f"Error: Unknown providers: {invalid}", file=sys.stderr)
        print(f"Available: {sorted(PROVIDERS)}", file=sys.stderr)
        sys.exit(1)

    try:
        parsed = parse(query)
    except MalformedQuery as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    return parsed, [get_provider(p) for p in providers]


@app.command(name="transform")
def transform(
    query: Annotated[str, cyclopts.Parameter(help="Query, e.g. 'author:Knuth AND year:1968'")],
    providers: ProviderOption = ["zbmath"],
    verbose: VerboseOption = False,
) -> None:
    """Print the query rendered for each provider."""
    parsed, instances = _setup(query, providers, verbose)

    for provider in instances:
        result = provider.compile(parsed)
        for diagnostic in result.diagnostics:
            print(f"[WARN] {provider.name}: {diagnostic.message}", file=sys.stderr)
        if result.query is None:
            print(f"[WARN] {provider.name}: no usable query", file=sys.stderr)
            continue
        prefix = f"{provider.name}: " if len(instances) > 1 else ""
        print(f"{prefix}{result.query}")


@app.command(name="url")
def url(
    query: Annotated[str, cyclopts.Parameter(help="Query text")],
    providers: ProviderOption = ["zbmath"],
    max_results: Annotated[
        int,
        cyclopts.Parameter(name=["--max", "-n"], help="Maximum results per provider"),
    ] = DEFAULT_MAX_RESULTS,
    verbose: VerboseOption = False,
) -> None:
    """Print the search request URL for each provider without sending it."""
    parsed, instances = _setup(query, providers, verbose)

    for provider in instances:
        try:
            request = build_request(parsed, provider, max_results)
        except ValueError as e:
            print(f"[WARN] {provider.name}: {e}", file=sys.stderr)
            continue
        if request is None:
            print(f"[WARN] {provider.name}: no usable query", file=sys.stderr)
            continue
        print(request.url)


@app.command(name="fetch")
def fetch(
    query: Annotated[str, cyclopts.Parameter(help="Query text")],
    provider: Annotated[
        str,
        cyclopts.Parameter(name=["--provider", "-p"], help="Provider to query"),
    ] = "zbmath",
    max_results: Annotated[
        int,
        cyclopts.Parameter(name=["--max", "-n"], help="Maximum results"),
    ] = DEFAULT_MAX_RESULTS,
    verbose: VerboseOption = False,
) -> None:
    """Send the query to a provider and print the raw response body."""
    parsed, (instance,) = _setup(query, [provider], verbose)

    try:
        body = asyncio.run(do_fetch(parsed, instance, max_results=max_results))
    except (ValueError, httpx.HTTPError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if body is None:
        print(f"[WARN] {instance.name}: no usable query", file=sys.stderr)
        return
    print(body)


@app.command(name="providers")
def providers() -> None:
    """List the available providers."""
    for name in sorted(PROVIDERS):
        print(name)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
