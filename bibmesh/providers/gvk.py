# bibmesh/providers/gvk.py
from bibmesh.providers.base import Provider


class GVK(Provider):
    """GVK union catalog (SRU/PICA) query transformer.

    GVK ANDs juxtaposed terms and has no OR or NOT. Year ranges lead to no
    results at all, so they are dropped.
    """

    name = "gvk"
    BASE_URL = "https://sru.gbv.de/gvk"

    def _load_from_env(self) -> str | None:
        return None  # GVK doesn't require API key

    def logical_and_operator(self) -> str | None:
        return " "

    def logical_or_operator(self) -> str | None:
        return None

    def logical_not_operator(self) -> str | None:
        return None

    def handle_author(self, author: str) -> str | None:
        return f"per:{author}"

    def handle_title(self, title: str) -> str | None:
        return f"tit:{title}"

    def handle_journal(self, journal: str) -> str | None:
        # zti: journals only, conferences would be kon:
        return f"zti:{journal}"

    def handle_year(self, year: str) -> str | None:
        return f"ver:{year}"

    def handle_year_range(self, start: int, end: int) -> str | None:
        return None

    def handle_unfielded_term(self, term: str) -> str | None:
        # all: covers metadata but not full text
        return f"all:{term}"

    def request_params(self, query: str, max_results: int) -> dict[str, str | int]:
        return {
            "version": "1.1",
            "operation": "searchRetrieve",
            "query": query,
            "maximumRecords": max_results,
            "recordSchema": "picaxml",
            "sortKeys": "Year,,1",
        }
